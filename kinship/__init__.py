"""
Kinship - Relationship deduction and six degrees mission planning.

This package contains:
- relationships: closed relationship vocabulary, deduction table and the
  family suggestion sweep
- graph: accepted-connection graph, bounded shortest path, next-hop ranking
- missions: mission state machine and planner
- data: PocketBase repositories feeding the engines
"""

__version__ = "0.1.0"
