"""Obligation resolution for license-notice."""
from license_notice.resolvers.conditions import ConditionResolver
from license_notice.resolvers.paths import InstallPathBuilder

__all__ = ["ConditionResolver", "InstallPathBuilder"]
