"""
Unit Tests for the Deployment Runner
"""

import pytest
from unittest.mock import Mock, AsyncMock

from proxy_deploy.blockchain.contract_factory import ArtifactNotFoundError
from proxy_deploy.deployment.runner import DeploymentRunner, DeploymentError, ExitOutcome


@pytest.fixture
def factory():
    """Resolved contract factory"""
    factory = Mock()
    factory.name = 'AptosExchange'
    return factory


@pytest.fixture
def resolver(factory):
    resolver = Mock()
    resolver.get_factory = AsyncMock(return_value=factory)
    return resolver


@pytest.fixture
def deployer():
    deployer = Mock()
    deployer.deploy_proxy = AsyncMock(return_value=Mock(address='0xABC'))
    return deployer


class TestExitOutcome:
    """Test outcome to exit code mapping"""

    def test_success(self):
        outcome = ExitOutcome.success('0xABC')

        assert outcome.succeeded
        assert outcome.exit_code == 0
        assert outcome.address == '0xABC'

    def test_failure(self):
        error = DeploymentError('AptosExchange', RuntimeError('boom'))
        outcome = ExitOutcome.failure(error)

        assert not outcome.succeeded
        assert outcome.exit_code == 1
        assert outcome.address is None

    def test_error_keeps_cause(self):
        cause = RuntimeError('boom')
        error = DeploymentError('AptosExchange', cause)

        assert error.__cause__ is cause
        assert error.unit_name == 'AptosExchange'
        assert 'boom' in str(error)


class TestDeploymentRunner:
    """Test runner success and failure paths"""

    @pytest.mark.asyncio
    async def test_success_prints_address(self, resolver, deployer, factory, capsys):
        """Deployment resolves to 0xABC"""
        runner = DeploymentRunner(resolver, deployer)

        outcome = await runner.run('AptosExchange')

        assert outcome.exit_code == 0
        assert outcome.address == '0xABC'
        assert capsys.readouterr().out == "AptosExchange contract deployed at: 0xABC\n"

        resolver.get_factory.assert_awaited_once_with('AptosExchange')
        deployer.deploy_proxy.assert_awaited_once_with(factory)

    @pytest.mark.asyncio
    async def test_deploy_failure(self, resolver, deployer, capsys, log_messages):
        """Deployment rejects with a network error"""
        deployer.deploy_proxy.side_effect = ConnectionError('network down')
        runner = DeploymentRunner(resolver, deployer)

        outcome = await runner.run('AptosExchange')

        assert outcome.exit_code == 1
        assert isinstance(outcome.error, DeploymentError)
        assert isinstance(outcome.error.__cause__, ConnectionError)
        assert capsys.readouterr().out == ""

        errors = [m for m in log_messages if m.record['level'].name == 'ERROR']
        assert len(errors) == 1
        assert 'network down' in errors[0]
        assert errors[0].record['exception'] is not None

    @pytest.mark.asyncio
    async def test_resolution_failure_skips_deploy(self, resolver, deployer, capsys):
        """Unknown contract never reaches the deployer"""
        resolver.get_factory.side_effect = ArtifactNotFoundError("Artifact for contract 'Missing' not found")
        runner = DeploymentRunner(resolver, deployer)

        outcome = await runner.run('Missing')

        assert outcome.exit_code == 1
        assert isinstance(outcome.error.__cause__, ArtifactNotFoundError)
        deployer.deploy_proxy.assert_not_awaited()
        assert capsys.readouterr().out == ""

    @pytest.mark.asyncio
    async def test_empty_name_fails(self, resolver, deployer, capsys):
        runner = DeploymentRunner(resolver, deployer)

        outcome = await runner.run('')

        assert outcome.exit_code == 1
        resolver.get_factory.assert_not_awaited()
        deployer.deploy_proxy.assert_not_awaited()
        assert capsys.readouterr().out == ""

    @pytest.mark.asyncio
    async def test_each_run_deploys_again(self, resolver, deployer):
        runner = DeploymentRunner(resolver, deployer)

        await runner.run('AptosExchange')
        await runner.run('AptosExchange')

        assert deployer.deploy_proxy.await_count == 2


class TestDeploymentRecording:
    """Test manifest bookkeeping after success"""

    @pytest.mark.asyncio
    async def test_records_deployment(self, resolver, deployer):
        manifest = Mock()
        runner = DeploymentRunner(resolver, deployer, manifest=manifest, chain_id=31337)

        outcome = await runner.run('AptosExchange')

        assert outcome.exit_code == 0
        manifest.record.assert_called_once_with(31337, deployer.deploy_proxy.return_value)

    @pytest.mark.asyncio
    async def test_manifest_error_does_not_fail_run(self, resolver, deployer, capsys, log_messages):
        manifest = Mock()
        manifest.record.side_effect = OSError('read-only file system')
        runner = DeploymentRunner(resolver, deployer, manifest=manifest, chain_id=31337)

        outcome = await runner.run('AptosExchange')

        assert outcome.exit_code == 0
        assert capsys.readouterr().out == "AptosExchange contract deployed at: 0xABC\n"
        assert any('read-only file system' in m for m in log_messages)

    @pytest.mark.asyncio
    async def test_failure_is_not_recorded(self, resolver, deployer):
        manifest = Mock()
        deployer.deploy_proxy.side_effect = RuntimeError('reverted')
        runner = DeploymentRunner(resolver, deployer, manifest=manifest, chain_id=31337)

        await runner.run('AptosExchange')

        manifest.record.assert_not_called()
