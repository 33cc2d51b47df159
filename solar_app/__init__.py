"""
Solar - Smart contract deployment management.

Resolves which blockchain backend to target from the environment, lazily
builds the deployer, contracts repository and event reporter, and expands
contract-name placeholders in deployment parameters.
"""

__version__ = "0.1.0"
__author__ = "Solar Team"
