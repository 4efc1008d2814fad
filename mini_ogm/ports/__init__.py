"""Public port exports for concrete session adapters."""

from .neo4j import Neo4jSession

__all__ = ["Neo4jSession"]
