"""
Deployment Package
Runs a single proxy deployment and maps the result to an exit code
"""

from .runner import DeploymentRunner, DeploymentError, ExitOutcome

__all__ = ['DeploymentRunner', 'DeploymentError', 'ExitOutcome']
