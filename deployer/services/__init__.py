from .chain_client import ChainClient
from .emp_creator import EMPCreator

__all__ = ['ChainClient', 'EMPCreator']
