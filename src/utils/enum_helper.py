"""Enum conversion utilities"""

from enum import Enum
from typing import TypeVar, Type, List, Any

# Generic type for any Enum subclass
E = TypeVar("E", bound=Enum)

class EnumHelper:
    """
    Utility class for working with Enums:
    - Parse config strings to enum members (case-insensitive)
    - List all member names
    - Render enum members as names
    """

    @staticmethod
    def list_names(enum_class: Type[E], lowercase: bool = False) -> List[str]:
        """
        List all Enum member names.

        Args:
            enum_class: Enum class to inspect
            lowercase: Return lowercase names

        Returns:
            List of member names (strings)
        """
        if not issubclass(enum_class, Enum):
            raise TypeError(f"{enum_class} is not an Enum class")

        if lowercase:
            return [member.name.lower() for member in enum_class]
        return [member.name for member in enum_class]

    @staticmethod
    def to_enum(enum_class: Type[E], value: Any) -> E:
        """Convert string (name, any case, '-' allowed for '_') to enum instance"""
        if isinstance(value, enum_class):
            return value
        if isinstance(value, str):
            try:
                return enum_class[value.strip().upper().replace("-", "_")]
            except KeyError:
                raise ValueError(
                    f"Invalid enum value '{value}' for {enum_class.__name__} "
                    f"(expected one of {EnumHelper.list_names(enum_class)})"
                )
        raise TypeError(f"Expected str or {enum_class.__name__}, got {type(value)}")

    @staticmethod
    def to_name(value: Any) -> str:
        """Convert enum instance to string name"""
        if hasattr(value, "name"):
            return value.name
        return str(value)
