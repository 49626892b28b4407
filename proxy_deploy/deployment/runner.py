"""
Deployment Runner
Resolves a contract, deploys it behind a proxy and reports the outcome
"""

from dataclasses import dataclass
from typing import Optional
from loguru import logger


class DeploymentError(Exception):
    """
    Any failure while resolving or deploying a contract

    The original error is kept as __cause__.
    """

    def __init__(self, unit_name: str, cause: BaseException):
        super().__init__(f"Deployment of '{unit_name}' failed: {cause}")
        self.unit_name = unit_name
        self.__cause__ = cause


@dataclass(frozen=True)
class ExitOutcome:
    """Terminal result of one run"""

    address: Optional[str] = None
    error: Optional[DeploymentError] = None

    @classmethod
    def success(cls, address: str) -> 'ExitOutcome':
        return cls(address=address)

    @classmethod
    def failure(cls, error: DeploymentError) -> 'ExitOutcome':
        return cls(error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1


class DeploymentRunner:
    """
    Runs one proxy deployment

    Both collaborators are injected:
    - resolver: async get_factory(name) -> factory
    - deployer: async deploy_proxy(factory) -> object with .address
    """

    def __init__(self, resolver, deployer, manifest=None, chain_id: Optional[int] = None):
        """
        Initialize Deployment Runner

        Args:
            resolver: Factory resolver
            deployer: Proxy deployer
            manifest: Optional DeploymentManifest to record successful deployments
            chain_id: Chain id used for the manifest
        """
        self.resolver = resolver
        self.deployer = deployer
        self.manifest = manifest
        self.chain_id = chain_id

    async def run(self, unit_name: str) -> ExitOutcome:
        """
        Deploy unit_name behind a proxy

        Prints "<unit> contract deployed at: <address>" on success.
        Every error is logged with its traceback and returned as a failure.

        Args:
            unit_name: Contract to deploy

        Returns:
            ExitOutcome
        """
        try:
            if not unit_name:
                raise ValueError("Contract name must not be empty")

            logger.info(f"Deploying {unit_name} behind a proxy...")

            factory = await self.resolver.get_factory(unit_name)
            deployment = await self.deployer.deploy_proxy(factory)

        except Exception as e:
            error = DeploymentError(unit_name, e)
            logger.opt(exception=e).error(str(error))
            return ExitOutcome.failure(error)

        print(f"{unit_name} contract deployed at: {deployment.address}")

        self._record(unit_name, deployment)

        return ExitOutcome.success(deployment.address)

    def _record(self, unit_name: str, deployment):
        """Store the deployment; the contract is already live, so errors only warn"""
        if self.manifest is None or self.chain_id is None:
            return

        try:
            self.manifest.record(self.chain_id, deployment)
        except Exception as e:
            logger.warning(f"Could not record {unit_name} deployment: {e}")
