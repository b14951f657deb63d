# inventory_api/constants/attribute_type.py

from enum import Enum


class AttributeType(str, Enum):
    COLOR = "color"
    SIZE = "size"
    CATEGORY = "category"


ATTRIBUTE_TYPES = {t.value for t in AttributeType}
