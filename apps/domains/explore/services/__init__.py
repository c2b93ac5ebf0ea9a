from .explore_service import ExploreResult, explore, preference_tags_for

__all__ = ["ExploreResult", "explore", "preference_tags_for"]
