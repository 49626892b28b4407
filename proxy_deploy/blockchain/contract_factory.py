"""
Contract Factory Resolution
Turns a contract name into a deployable factory using compiled artifacts
"""

import os
import json
from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger


class ArtifactError(ValueError):
    """Artifact exists but cannot be deployed"""


class ArtifactNotFoundError(LookupError):
    """No compiled artifact for the requested contract"""


class AmbiguousArtifactError(LookupError):
    """Several artifacts share the requested contract name"""


class ContractFactory:
    """
    Compiled contract that can be deployed
    """

    def __init__(self, name: str, abi: List[Dict], bytecode: str, source_name: Optional[str] = None):
        """
        Initialize Contract Factory

        Args:
            name: Contract name
            abi: Contract ABI
            bytecode: Creation bytecode (hex)
            source_name: Source file the contract was compiled from
        """
        self.name = name
        self.abi = abi
        self.bytecode = bytecode
        self.source_name = source_name

    @property
    def fully_qualified_name(self) -> str:
        if self.source_name:
            return f"{self.source_name}:{self.name}"
        return self.name

    def contract(self, w3: Web3):
        """Web3 contract class bound to w3"""
        return w3.eth.contract(abi=self.abi, bytecode=self.bytecode)

    def find_function(self, name: str, arity: Optional[int] = None) -> Optional[Dict]:
        """
        Find an ABI function by name

        Args:
            name: Function name
            arity: Required number of inputs (None matches any)

        Returns:
            ABI entry or None
        """
        for entry in self.abi:
            if entry.get('type') != 'function' or entry.get('name') != name:
                continue
            if arity is not None and len(entry.get('inputs', [])) != arity:
                continue
            return entry
        return None

    def __repr__(self):
        return f"ContractFactory({self.fully_qualified_name})"


class ArtifactFactoryResolver:
    """
    Resolves contract factories from Hardhat or Foundry build output
    """

    def __init__(self, w3: Web3, artifacts_dir: str = "artifacts"):
        """
        Initialize resolver

        Args:
            w3: Web3 instance
            artifacts_dir: Compiled artifacts root ('artifacts' for Hardhat, 'out' for Foundry)
        """
        self.w3 = w3
        self.artifacts_dir = artifacts_dir
        self._cache: Dict[str, ContractFactory] = {}

    async def get_factory(self, name: str) -> ContractFactory:
        """
        Resolve a contract factory by name

        Args:
            name: Contract name, or fully qualified 'path/File.sol:Name'

        Returns:
            ContractFactory

        Raises:
            ArtifactNotFoundError, AmbiguousArtifactError, ArtifactError
        """
        if name in self._cache:
            return self._cache[name]

        path = self._find_artifact(name)
        factory = self._load_artifact(path)

        logger.info(f"Resolved {factory.fully_qualified_name} from {path}")

        self._cache[name] = factory
        return factory

    def _find_artifact(self, name: str) -> str:
        """Locate the artifact JSON for a contract"""
        if not os.path.isdir(self.artifacts_dir):
            raise ArtifactNotFoundError(
                f"Artifacts directory '{self.artifacts_dir}' not found. Compile the contracts first"
            )

        source_name = None
        contract_name = name

        if ':' in name:
            source_name, contract_name = name.rsplit(':', 1)

        matches = []

        for root, dirs, files in os.walk(self.artifacts_dir):
            # Hardhat keeps solc input/output here, never contract artifacts
            dirs[:] = [d for d in dirs if d != 'build-info']

            if f"{contract_name}.json" not in files:
                continue

            path = os.path.join(root, f"{contract_name}.json")

            if source_name and self._source_of(path) != source_name:
                continue

            matches.append(path)

        if not matches:
            raise ArtifactNotFoundError(
                f"Artifact for contract '{name}' not found in {self.artifacts_dir}"
            )

        if len(matches) > 1:
            candidates = ", ".join(sorted(matches))
            raise AmbiguousArtifactError(
                f"Multiple artifacts for contract '{name}': {candidates}. Use a fully qualified name"
            )

        return matches[0]

    def _source_of(self, path: str) -> str:
        """
        Source file an artifact was compiled from

        Hardhat records 'sourceName'; Foundry records the compilation target
        in its metadata. Falls back to the artifact's folder relative to
        the artifacts root.
        """
        with open(path, 'r') as f:
            artifact = json.load(f)

        if artifact.get('sourceName'):
            return artifact['sourceName']

        metadata = artifact.get('metadata')
        if isinstance(metadata, str):
            try:
                metadata = json.loads(metadata)
            except ValueError:
                metadata = None

        if isinstance(metadata, dict):
            targets = metadata.get('settings', {}).get('compilationTarget', {})
            if len(targets) == 1:
                return next(iter(targets))

        folder = os.path.relpath(os.path.dirname(path), self.artifacts_dir)
        return folder.replace(os.sep, '/')

    def _load_artifact(self, path: str) -> ContractFactory:
        """Parse a Hardhat or Foundry artifact"""
        with open(path, 'r') as f:
            artifact = json.load(f)

        name = artifact.get('contractName') or os.path.splitext(os.path.basename(path))[0]
        source_name = artifact.get('sourceName')

        abi = artifact.get('abi')
        if abi is None:
            raise ArtifactError(f"Artifact {path} has no ABI")

        bytecode = artifact.get('bytecode', '')
        link_references = artifact.get('linkReferences', {})

        # Foundry nests bytecode and link references under 'object'
        if isinstance(bytecode, dict):
            link_references = bytecode.get('linkReferences', {})
            bytecode = bytecode.get('object', '')

        if not bytecode or bytecode in ('0x', '0x0'):
            raise ArtifactError(
                f"Contract '{name}' has no bytecode (interface or abstract contract)"
            )

        if link_references:
            libraries = sorted(
                lib for libs in link_references.values() for lib in libs
            )
            raise ArtifactError(
                f"Contract '{name}' needs library linking ({', '.join(libraries)}), which is not supported"
            )

        if not bytecode.startswith('0x'):
            bytecode = '0x' + bytecode

        return ContractFactory(name, abi, bytecode, source_name)
