"""
Column types for legacy serialized data
"""
from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

from legacy_audit.utils.json_serializer import dump_change_history, load_change_history


class SerializedHistory(TypeDecorator):
    """Text column holding a JSON-serialized change history"""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return dump_change_history(value)

    def process_result_value(self, value, dialect):
        return load_change_history(value)
