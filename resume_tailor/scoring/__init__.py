from .ats import check_ats_compatibility, get_missing_skills
from .benchmark import IndustryProfile, detect_industry

__all__ = ["check_ats_compatibility", "get_missing_skills", "IndustryProfile", "detect_industry"]
