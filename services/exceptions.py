class PostServiceError(Exception):
    """Base class for failures that map to a client-facing HTTP status"""
    status_code = 400
    msg = "Bad Request"

    def __init__(self, msg: str = None):
        self.msg = msg or self.msg
        super().__init__(self.msg)


class PostNotFound(PostServiceError):
    msg = "Post Not Found"


class CommentNotFound(PostServiceError):
    msg = "Comment Does Not Exist"


class NotAuthorized(PostServiceError):
    status_code = 401
    msg = "User Not Authorized"


class AlreadyLiked(PostServiceError):
    msg = "Post Already Liked"


class NotLiked(PostServiceError):
    msg = "Post has not yet been liked"


class EmptyText(PostServiceError):
    msg = "Text is required"

    def __init__(self, msg: str = None, value: str = ""):
        super().__init__(msg)
        self.value = value
