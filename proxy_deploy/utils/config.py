"""
Deployment Configuration
Loads deployer settings from the environment (.env)
"""

import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


PROXY_KINDS = ('transparent', 'uups')


class ConfigError(ValueError):
    """Raised when required settings are missing or malformed"""


@dataclass(frozen=True)
class DeployConfig:
    """Settings for a single deployment run"""

    rpc_url: str
    private_key: str
    contract_name: str = 'AptosExchange'
    proxy_kind: str = 'transparent'
    artifacts_dir: str = 'artifacts'
    chain_id: Optional[int] = None
    receipt_timeout: float = 300
    min_balance: float = 0
    deployments_dir: str = 'deployments'
    log_level: str = 'INFO'
    log_file: str = 'data/logs/deploy.log'

    @classmethod
    def from_env(cls) -> 'DeployConfig':
        """
        Build config from environment variables

        Raises:
            ConfigError: listing every missing or malformed value
        """
        problems = []

        rpc_url = os.getenv('RPC_URL', '').strip()
        private_key = os.getenv('DEPLOYER_PRIVATE_KEY', '').strip()

        if not rpc_url:
            problems.append("RPC_URL must be set")
        if not private_key:
            problems.append("DEPLOYER_PRIVATE_KEY must be set")

        contract_name = os.getenv('DEPLOY_CONTRACT', 'AptosExchange').strip()
        if not contract_name:
            problems.append("DEPLOY_CONTRACT must not be empty")

        proxy_kind = os.getenv('PROXY_KIND', 'transparent').strip().lower()
        if proxy_kind not in PROXY_KINDS:
            problems.append(f"PROXY_KIND must be one of {', '.join(PROXY_KINDS)}, got '{proxy_kind}'")

        chain_id = _parse_number('CHAIN_ID', None, int, problems)
        receipt_timeout = _parse_number('RECEIPT_TIMEOUT', 300, float, problems)
        min_balance = _parse_number('MIN_DEPLOYER_BALANCE', 0, float, problems)

        if receipt_timeout is not None and receipt_timeout <= 0:
            problems.append("RECEIPT_TIMEOUT must be positive")
        if min_balance is not None and min_balance < 0:
            problems.append("MIN_DEPLOYER_BALANCE must not be negative")

        if problems:
            raise ConfigError("Invalid deployment configuration: " + "; ".join(problems))

        return cls(
            rpc_url=rpc_url,
            private_key=private_key,
            contract_name=contract_name,
            proxy_kind=proxy_kind,
            artifacts_dir=os.getenv('ARTIFACTS_DIR', 'artifacts'),
            chain_id=chain_id,
            receipt_timeout=receipt_timeout,
            min_balance=min_balance,
            deployments_dir=os.getenv('DEPLOYMENTS_DIR', 'deployments'),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            log_file=os.getenv('LOG_FILE', 'data/logs/deploy.log')
        )


def _parse_number(name: str, default, cast, problems: list):
    raw = os.getenv(name, '').strip()

    if not raw:
        return default

    try:
        return cast(raw)
    except ValueError:
        problems.append(f"{name} must be a number, got '{raw}'")
        return default
