"""Client-facing message strings for every endpoint outcome.

Invariants:
    - Strings are part of the public HTTP contract; clients match on them verbatim
    - Punctuation differs between endpoints on purpose and must not be normalized
"""

# Success
POSTS_LISTED = "array of posts"
POST_DELETED = "post successfully deleted"

# 400
POST_FIELDS_REQUIRED = "Please provide title and contents for the post."
COMMENT_TEXT_REQUIRED = "Please provide text for the comment."
INVALID_REQUEST = "Invalid request data"

# 404
POST_NOT_FOUND = "The post with the specified ID does not exist."

# 500
POST_SAVE_FAILED = "There was an error while saving the post to the database."
POSTS_RETRIEVE_FAILED = "The posts information could not be retrieved."
POST_RETRIEVE_FAILED = "The post information could not be retrieved"
POST_MODIFY_FAILED = "The post information could not be modified."
POST_REMOVE_FAILED = "The post could not be removed."
COMMENT_SAVE_FAILED = "There was an error while saving the comment to the database."
COMMENTS_RETRIEVE_FAILED = "The comment information could not be retrieved"
UNEXPECTED_ERROR = "An unexpected error occurred"
