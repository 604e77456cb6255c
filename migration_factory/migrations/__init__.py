"""
Migrations - one class per supported major-version transition

Supported:
- React 17→18
- Node 20→22
"""

from .node22 import NodeMigration
from .react18 import ReactMigration

__all__ = ['NodeMigration', 'ReactMigration']
