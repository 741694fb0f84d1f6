from app.crud.user_crud import user_crud
from app.crud.follow_crud import follow_crud
from app.crud.postcard_crud import postcard_crud

__all__ = [
    "user_crud",
    "follow_crud",
    "postcard_crud",
]
