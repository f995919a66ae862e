# Services package.
#
# Each module exposes the same five async functions for a single table:
#
#   article_service : blogful_articles
#   comment_service : blogful_comments
#   user_service    : blogful_users (hashes passwords on write)
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.
