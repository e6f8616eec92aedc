# File: studymate_app/utils/pagination.py
# Pagination helper for SQLAlchemy select statements.

from flask import current_app

from ..core.extensions import db


def get_pagination_data(query, page, per_page=None):
    """
    Paginate a SQLAlchemy select statement.

    Args:
        query: a ``select()`` statement.
        page (int): current page (1-based).
        per_page (int, optional): items per page, defaults to ITEMS_PER_PAGE.

    Returns:
        Pagination: Flask-SQLAlchemy pagination object. Out-of-range pages
        return an empty page instead of a 404.
    """
    if per_page is None:
        per_page = current_app.config.get('ITEMS_PER_PAGE', 12)

    return db.paginate(query, page=page or 1, per_page=per_page, error_out=False)
