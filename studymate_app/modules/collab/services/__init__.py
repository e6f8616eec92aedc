from .group_service import GroupService
from .share_service import ShareService

__all__ = ['GroupService', 'ShareService']
