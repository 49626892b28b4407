"""
Unit Tests for the deployment manifest
"""

import json

from proxy_deploy.blockchain.proxy_deployer import Deployment
from proxy_deploy.utils.deployment_manifest import DeploymentManifest
from tests.helpers import IMPL_ADDRESS, PROXY_ADDRESS, ADMIN_ADDRESS


def make_deployment(kind='transparent'):
    return Deployment(
        contract_name='AptosExchange',
        address=PROXY_ADDRESS,
        implementation_address=IMPL_ADDRESS,
        kind=kind,
        transaction_hash='0x' + 'ab' * 32,
        admin_address=ADMIN_ADDRESS if kind == 'transparent' else None
    )


class TestDeploymentManifest:

    def test_load_without_file(self, tmp_path):
        manifest = DeploymentManifest(str(tmp_path / "deployments"))

        assert manifest.load(31337) == []

    def test_record_appends(self, tmp_path):
        manifest = DeploymentManifest(str(tmp_path / "deployments"))

        manifest.record(31337, make_deployment())
        manifest.record(31337, make_deployment('uups'))

        records = manifest.load(31337)
        assert [r['kind'] for r in records] == ['transparent', 'uups']
        assert records[0]['contract'] == 'AptosExchange'
        assert records[0]['admin_address'] == ADMIN_ADDRESS
        assert isinstance(records[0]['timestamp'], int)

    def test_chains_are_separate(self, tmp_path):
        manifest = DeploymentManifest(str(tmp_path))

        manifest.record(1, make_deployment())

        assert manifest.load(137) == []
        with open(tmp_path / "1.json") as f:
            assert json.load(f)['chainId'] == 1
