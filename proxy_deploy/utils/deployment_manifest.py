"""
Deployment Manifest
Keeps a JSON record of proxy deployments per chain
"""

import os
import json
import time
from typing import Dict, List
from loguru import logger


class DeploymentManifest:
    """
    Append-only record of deployments, one JSON file per chain id
    """

    def __init__(self, directory: str = "deployments"):
        """
        Initialize manifest

        Args:
            directory: Folder holding <chain_id>.json files
        """
        self.directory = directory

    def path_for(self, chain_id: int) -> str:
        return os.path.join(self.directory, f"{chain_id}.json")

    def load(self, chain_id: int) -> List[Dict]:
        """
        Load recorded deployments for a chain

        Returns:
            List of deployment records (empty if none recorded yet)
        """
        path = self.path_for(chain_id)

        if not os.path.exists(path):
            return []

        with open(path, 'r') as f:
            data = json.load(f)

        return data.get('deployments', [])

    def record(self, chain_id: int, deployment) -> Dict:
        """
        Append a deployment to the chain's manifest

        Args:
            chain_id: Chain the deployment was sent to
            deployment: Deployment returned by the proxy deployer

        Returns:
            The stored record
        """
        os.makedirs(self.directory, exist_ok=True)

        entry = deployment.to_dict()
        entry['timestamp'] = int(time.time())

        deployments = self.load(chain_id)
        deployments.append(entry)

        path = self.path_for(chain_id)
        tmp_path = path + ".tmp"

        with open(tmp_path, 'w') as f:
            json.dump({'chainId': chain_id, 'deployments': deployments}, f, indent=2)

        os.replace(tmp_path, path)

        logger.debug(f"Recorded {entry['contract']} in {path}")
        return entry
