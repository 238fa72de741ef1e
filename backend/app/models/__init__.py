from backend.app.models.user import User
from backend.app.models.file_record import FileRecord
from backend.app.models.post import Post

__all__ = ["User", "FileRecord", "Post"]
