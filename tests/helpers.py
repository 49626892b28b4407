"""
Test helpers: addresses and artifact writers
"""

import json


IMPL_ADDRESS = '0x1111111111111111111111111111111111111111'
PROXY_ADDRESS = '0x2222222222222222222222222222222222222222'
ADMIN_ADDRESS = '0x3333333333333333333333333333333333333333'
DEPLOYER_ADDRESS = '0x4444444444444444444444444444444444444444'


def write_artifact(root, source_name, contract_name, abi=None, bytecode='0x6080', **extra):
    """Write a Hardhat style artifact under root"""
    folder = root.joinpath(*source_name.split('/'))
    folder.mkdir(parents=True, exist_ok=True)

    artifact = {
        '_format': 'hh-sol-artifact-1',
        'contractName': contract_name,
        'sourceName': source_name,
        'abi': abi if abi is not None else [],
        'bytecode': bytecode,
        'deployedBytecode': bytecode,
        'linkReferences': {},
        'deployedLinkReferences': {}
    }
    artifact.update(extra)

    path = folder / f"{contract_name}.json"
    path.write_text(json.dumps(artifact))

    # Hardhat writes a debug file next to every artifact
    (folder / f"{contract_name}.dbg.json").write_text(json.dumps({'_format': 'hh-sol-dbg-1'}))

    return path
