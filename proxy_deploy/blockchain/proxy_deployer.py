"""
Proxy Deployer
Deploys an implementation contract behind an OpenZeppelin proxy
"""

import asyncio
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional
from web3 import Web3
from eth_abi import encode
from loguru import logger

from .contract_factory import ContractFactory


# EIP-1967: bytes32(uint256(keccak256('eip1967.proxy.admin')) - 1)
ADMIN_SLOT = 0xb53127684a568b3173ae13b9f8a6016e243e63b6e8ee1178d6a717850b5d6103

PROXY_CONTRACTS = {
    'transparent': 'TransparentUpgradeableProxy',
    'uups': 'ERC1967Proxy',
}


class InitializerError(ValueError):
    """Initializer arguments don't match the contract ABI"""


@dataclass(frozen=True)
class Deployment:
    """Result of a proxy deployment"""

    contract_name: str
    address: str
    implementation_address: str
    kind: str
    transaction_hash: str
    admin_address: Optional[str] = None

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['contract'] = data.pop('contract_name')
        return data


class ProxyDeployer:
    """
    Deploys upgradeable contracts: implementation first, then the proxy
    pointing at it with the encoded initializer call
    """

    def __init__(self, w3: Web3, sender, resolver, kind: str = 'transparent'):
        """
        Initialize Proxy Deployer

        Args:
            w3: Web3 instance
            sender: TransactionSender used for every deployment
            resolver: Factory resolver providing the proxy contracts
            kind: Default proxy kind ('transparent' or 'uups')
        """
        self.w3 = w3
        self.sender = sender
        self.resolver = resolver
        self.kind = kind

    async def deploy_proxy(
        self,
        factory: ContractFactory,
        args: List = None,
        initializer: Optional[str] = 'initialize',
        kind: Optional[str] = None
    ) -> Deployment:
        """
        Deploy factory's contract behind a proxy

        Args:
            factory: Implementation contract factory
            args: Initializer arguments
            initializer: Initializer function name (None skips initialization)
            kind: Proxy kind, overrides the default

        Returns:
            Deployment with proxy and implementation addresses
        """
        args = list(args or [])
        kind = kind or self.kind

        if kind not in PROXY_CONTRACTS:
            raise ValueError(f"Unsupported proxy kind: {kind}")

        init_data = self.encode_initializer(factory, initializer, args)
        proxy_factory = await self.resolver.get_factory(PROXY_CONTRACTS[kind])

        # web3 calls block; keep them off the event loop
        return await asyncio.get_event_loop().run_in_executor(
            None,
            self._deploy,
            factory,
            proxy_factory,
            init_data,
            kind
        )

    def encode_initializer(self, factory: ContractFactory, initializer: Optional[str], args: List) -> bytes:
        """
        Encode the initializer call data for the proxy constructor

        Returns:
            Call data (empty when there is nothing to call)
        """
        if not initializer:
            if args:
                raise InitializerError("Initializer arguments given but initializer is disabled")
            return b''

        function = factory.find_function(initializer, len(args))

        if function is None:
            if args:
                raise InitializerError(
                    f"{factory.name} has no function {initializer} taking {len(args)} argument(s)"
                )
            logger.debug(f"{factory.name} has no {initializer}(), proxy will not be initialized")
            return b''

        types = [_abi_type(param) for param in function.get('inputs', [])]
        selector = Web3.keccak(text=f"{initializer}({','.join(types)})")[:4]

        return bytes(selector) + encode(types, args)

    def _deploy(self, factory: ContractFactory, proxy_factory: ContractFactory, init_data: bytes, kind: str) -> Deployment:
        """Send implementation and proxy deployments (blocking)"""
        logger.info(f"Deploying {factory.name} implementation...")
        impl_receipt = self.sender.deploy(factory.contract(self.w3), label=factory.name)
        implementation = Web3.to_checksum_address(impl_receipt['contractAddress'])

        if kind == 'transparent':
            proxy_args = [implementation, self.sender.address, init_data]
        else:
            proxy_args = [implementation, init_data]

        logger.info(f"Deploying {proxy_factory.name} for {factory.name}...")
        proxy_receipt = self.sender.deploy(
            proxy_factory.contract(self.w3),
            proxy_args,
            label=proxy_factory.name
        )
        proxy_address = Web3.to_checksum_address(proxy_receipt['contractAddress'])

        admin_address = None
        if kind == 'transparent':
            admin_address = self._read_admin(proxy_address)

        deployment = Deployment(
            contract_name=factory.name,
            address=proxy_address,
            implementation_address=implementation,
            kind=kind,
            transaction_hash=Web3.to_hex(proxy_receipt['transactionHash']),
            admin_address=admin_address
        )

        logger.success(f"{factory.name} proxy deployed: {proxy_address} -> {implementation}")
        return deployment

    def _read_admin(self, proxy_address: str) -> str:
        """ProxyAdmin created by a transparent proxy"""
        raw = self.w3.eth.get_storage_at(proxy_address, ADMIN_SLOT)
        return Web3.to_checksum_address(bytes(raw)[-20:])


def _abi_type(param: Dict) -> str:
    """Canonical ABI type, expanding tuples"""
    abi_type = param['type']

    if abi_type.startswith('tuple'):
        inner = ','.join(_abi_type(c) for c in param.get('components', []))
        return f"({inner}){abi_type[len('tuple'):]}"

    return abi_type
