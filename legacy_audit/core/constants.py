"""
Constants for audit actions and service metadata
"""

SERVICE_NAME = "legacy-audit"

# Actions written by the auditing layer
ACTION_CREATE = "create"
ACTION_UPDATE = "update"
ACTION_DESTROY = "destroy"

AUDIT_ACTIONS = (ACTION_CREATE, ACTION_UPDATE, ACTION_DESTROY)

# Values accepted by the legacy Audit.audit_type_ucode column
LEGACY_AUDIT_TYPE_CODES = ("CREATE", "UPDATE", "DESTROY")

# Version given to every new audit row while sequential versioning is off
DEFAULT_AUDIT_VERSION = 0

# Keys understood by the foreign-key context bag
MEMBER_UID_KEY = "member_uid"
MEMBERSHIP_UID_KEY = "membership_uid"
MEMBERSHIP_CONTRACT_UID_KEY = "membership_contract_uid"
