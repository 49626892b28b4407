"""
Blockchain Interaction Package
Resolves compiled contracts, signs transactions and deploys proxies
"""

from .contract_factory import ContractFactory, ArtifactFactoryResolver
from .transaction_sender import TransactionSender
from .proxy_deployer import ProxyDeployer, Deployment

__all__ = [
    'ContractFactory',
    'ArtifactFactoryResolver',
    'TransactionSender',
    'ProxyDeployer',
    'Deployment'
]
