"""
Expiring Multi-Party deployer package
"""

__version__ = "0.1.0"
