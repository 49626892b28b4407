"""
Upgradeable contract deployment
Deploys a compiled contract behind an OpenZeppelin proxy
"""
