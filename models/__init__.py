from .major import Major
from .category import Category
from .group_major import GroupMajor
from .course import Course

__all__ = ["Major", "Category", "GroupMajor", "Course"]
