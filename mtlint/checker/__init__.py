"""
mtlint.checker: passes that run over a successfully parsed template.

  - binder: argument/property count and mode checks (BIND_ERROR)
  - naming: duplicate names and casing (DUPLICATE_NAME, NON_PASCAL_CASE)
"""

from .binder import Locator, bind_properties
from .naming import check_naming

__all__ = ["Locator", "bind_properties", "check_naming"]
