"""Policy module — auditor policy file and resolved run configuration."""

from docaudit.policy.resolver import AuditorConfig, PolicyResolver

__all__ = ["AuditorConfig", "PolicyResolver"]
