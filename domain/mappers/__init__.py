"""
Domain mappers package - ORM/domain to DTO transformations.
"""

from domain.mappers.plan_mapper import PlanMapper

__all__ = ["PlanMapper"]
