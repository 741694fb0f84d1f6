from app.model.user import User
from app.model.follow import Follow
from app.model.postcard import Postcard, PostcardStatus

__all__ = ["User", "Follow", "Postcard", "PostcardStatus"]
