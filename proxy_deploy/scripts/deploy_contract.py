"""
Upgradeable Contract Deployment Script
Deploys the configured contract behind a proxy and exits 0 on success, 1 on failure
"""

import sys
import asyncio
from web3 import Web3
from eth_account import Account
from loguru import logger

from proxy_deploy.blockchain.contract_factory import ArtifactFactoryResolver
from proxy_deploy.blockchain.transaction_sender import TransactionSender
from proxy_deploy.blockchain.proxy_deployer import ProxyDeployer
from proxy_deploy.deployment.runner import DeploymentRunner
from proxy_deploy.utils.config import DeployConfig
from proxy_deploy.utils.deployment_manifest import DeploymentManifest
from proxy_deploy.utils.logging_config import configure_logging


def build_runner(config: DeployConfig) -> DeploymentRunner:
    """
    Connect to the network and wire the runner's collaborators

    Raises:
        ConnectionError: if the RPC endpoint is unreachable
    """
    w3 = Web3(Web3.HTTPProvider(config.rpc_url))

    if not w3.is_connected():
        raise ConnectionError(f"Failed to connect to {config.rpc_url}")

    account = Account.from_key(config.private_key)
    chain_id = config.chain_id if config.chain_id is not None else w3.eth.chain_id

    logger.info(f"Deploying from: {account.address} (chain {chain_id})")

    sender = TransactionSender(
        w3,
        account,
        chain_id=chain_id,
        receipt_timeout=config.receipt_timeout
    )
    sender.ensure_balance(config.min_balance)

    resolver = ArtifactFactoryResolver(w3, config.artifacts_dir)
    deployer = ProxyDeployer(w3, sender, resolver, kind=config.proxy_kind)

    manifest = DeploymentManifest(config.deployments_dir) if config.deployments_dir else None

    return DeploymentRunner(resolver, deployer, manifest=manifest, chain_id=chain_id)


async def main(config: DeployConfig = None) -> int:
    """
    Run one deployment

    Returns:
        Process exit code
    """
    try:
        config = config or DeployConfig.from_env()
        runner = build_runner(config)
    except Exception as e:
        logger.opt(exception=e).error(f"Deployment setup failed: {e}")
        return 1

    outcome = await runner.run(config.contract_name)
    return outcome.exit_code


def run():
    """Console script entry point"""
    try:
        config = DeployConfig.from_env()
    except Exception as e:
        configure_logging()
        logger.opt(exception=e).error(f"Deployment setup failed: {e}")
        sys.exit(1)

    configure_logging(config.log_level, config.log_file)
    sys.exit(asyncio.run(main(config)))


if __name__ == "__main__":
    run()
