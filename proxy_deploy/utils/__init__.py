"""
Utilities Package
Configuration, logging and deployment bookkeeping
"""

from .config import DeployConfig, ConfigError
from .logging_config import configure_logging
from .deployment_manifest import DeploymentManifest

__all__ = [
    'DeployConfig',
    'ConfigError',
    'configure_logging',
    'DeploymentManifest'
]
