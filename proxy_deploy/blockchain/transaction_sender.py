"""
Transaction Sender
Signs and submits deployment transactions from the deployer account
"""

from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger


DEFAULT_GAS_LIMIT = 3000000
GAS_BUFFER = 1.2  # 20% on top of the estimate


class TransactionFailedError(RuntimeError):
    """Transaction was mined but reverted"""

    def __init__(self, message: str, tx_hash: str):
        super().__init__(f"{message} (tx {tx_hash})")
        self.tx_hash = tx_hash


class InsufficientFundsError(RuntimeError):
    """Deployer balance is below the configured minimum"""


class TransactionSender:
    """
    Builds, signs and sends contract creation transactions
    """

    def __init__(
        self,
        w3: Web3,
        account,
        chain_id: Optional[int] = None,
        receipt_timeout: float = 300
    ):
        """
        Initialize Transaction Sender

        Args:
            w3: Web3 instance
            account: eth_account LocalAccount used for signing
            chain_id: Chain id (read from the node if None)
            receipt_timeout: Seconds to wait for each receipt
        """
        self.w3 = w3
        self.account = account
        self.address = account.address
        self._chain_id = chain_id
        self.receipt_timeout = receipt_timeout

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = self.w3.eth.chain_id
        return self._chain_id

    def ensure_balance(self, minimum_ether: float):
        """
        Fail fast when the deployer cannot pay for deployment

        Args:
            minimum_ether: Required balance in ether (0 disables the check)
        """
        if minimum_ether <= 0:
            return

        balance = self.w3.from_wei(self.w3.eth.get_balance(self.address), 'ether')
        logger.info(f"Deployer balance: {balance}")

        if balance < minimum_ether:
            raise InsufficientFundsError(
                f"Insufficient balance for deployment: {balance} < {minimum_ether}"
            )

    def deploy(self, contract, args: List = None, label: str = "contract") -> Dict:
        """
        Deploy a contract and wait for it to be mined

        Args:
            contract: Web3 contract class (abi + bytecode)
            args: Constructor arguments
            label: Name used in log messages

        Returns:
            Transaction receipt

        Raises:
            TransactionFailedError: if the deployment reverted
        """
        constructor = contract.constructor(*(args or []))

        nonce = self.w3.eth.get_transaction_count(self.address, 'pending')
        gas_price = self.w3.eth.gas_price

        try:
            gas_estimate = constructor.estimate_gas({'from': self.address})
            gas_limit = int(gas_estimate * GAS_BUFFER)
        except Exception as e:
            logger.warning(f"Gas estimation for {label} failed: {e}, using default")
            gas_limit = DEFAULT_GAS_LIMIT

        transaction = constructor.build_transaction({
            'from': self.address,
            'nonce': nonce,
            'gas': gas_limit,
            'gasPrice': gas_price,
            'chainId': self.chain_id
        })

        logger.debug(f"{label}: nonce={nonce} gas={gas_limit} gasPrice={gas_price}")

        signed_tx = self.account.sign_transaction(transaction)
        tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

        logger.info(f"{label} deployment sent: {Web3.to_hex(tx_hash)}")

        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)

        if receipt['status'] != 1:
            raise TransactionFailedError(f"Deployment of {label} reverted", Web3.to_hex(tx_hash))

        logger.info(f"{label} deployed at {receipt['contractAddress']} (gas used: {receipt['gasUsed']})")
        return receipt
