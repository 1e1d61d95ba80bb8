"""Deployment Environments: tier names and the sensitive-tier classifier.

Invariants:
    - Production, Staging and Demo are sensitive: internal error detail is redacted
    - Comparison is case-insensitive; unknown or empty names are not sensitive
"""

from enum import Enum


class DeploymentEnvironment(str, Enum):
    LOCAL = "Development"
    DEVELOPMENT = "Dev"
    TEST = "Test"
    STAGING = "Staging"
    PRODUCTION = "Production"
    DEMO = "Demo"


SENSITIVE_ENVIRONMENTS = frozenset({
    DeploymentEnvironment.PRODUCTION,
    DeploymentEnvironment.STAGING,
    DeploymentEnvironment.DEMO,
})


def is_environment(name: str | None, environment: DeploymentEnvironment) -> bool:
    return (name or "").strip().lower() == environment.value.lower()


def is_sensitive_environment(name: str | None) -> bool:
    """True when `name` is a production, staging or demo tier."""
    return any(is_environment(name, env) for env in SENSITIVE_ENVIRONMENTS)
