"""
Error Handlers for StudyMate

Provides:
- Custom exception classes raised by the service layer
- Flask error handlers that turn them into flash + redirect responses
- Generic pages for 404 / 500
"""

from typing import Any, Dict, Optional

from flask import current_app, flash, jsonify, redirect, render_template, request, url_for
from flask_wtf.csrf import CSRFError
from sqlalchemy.exc import SQLAlchemyError

from .extensions import db

GENERIC_ERROR_MESSAGE = 'Something went wrong. Please try again.'


class StudyMateError(Exception):
    """Base exception class for StudyMate."""

    def __init__(
        self,
        message: str,
        code: str = 'UNKNOWN_ERROR',
        status_code: int = 500,
        redirect_endpoint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.redirect_endpoint = redirect_endpoint
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for JSON response."""
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details
        }


class NotFoundError(StudyMateError):
    """Resource not found, or not owned by the current user."""

    def __init__(self, message: str = 'Not found', redirect_endpoint: str = None, resource: str = None):
        super().__init__(
            message=message,
            code='NOT_FOUND',
            status_code=404,
            redirect_endpoint=redirect_endpoint,
            details={'resource': resource} if resource else None
        )


class ValidationError(StudyMateError):
    """Input validation failed."""

    def __init__(self, message: str = 'Validation failed', redirect_endpoint: str = None, errors: Dict = None):
        super().__init__(
            message=message,
            code='VALIDATION_ERROR',
            status_code=400,
            redirect_endpoint=redirect_endpoint,
            details={'errors': errors} if errors else None
        )


class AuthorizationError(StudyMateError):
    """Access denied."""

    def __init__(self, message: str = 'Access denied', redirect_endpoint: str = None):
        super().__init__(
            message=message,
            code='UNAUTHORIZED',
            status_code=403,
            redirect_endpoint=redirect_endpoint
        )


def wants_json() -> bool:
    """True when the client asked for a JSON answer (XHR / fetch calls)."""
    if request.is_json or request.args.get('ajax') or request.form.get('ajax'):
        return True
    best = request.accept_mimetypes.best_match(['application/json', 'text/html'])
    return best == 'application/json' and request.accept_mimetypes[best] > request.accept_mimetypes['text/html']


def error_response(
    message: str,
    code: str = 'ERROR',
    status_code: int = 400,
    details: Dict = None
) -> tuple:
    """Create a standardized JSON error response."""
    response = {
        'success': False,
        'message': message,
        'code': code
    }
    if details:
        response['details'] = details

    return jsonify(response), status_code


def _redirect_back(endpoint: Optional[str] = None):
    if endpoint:
        return redirect(url_for(endpoint))
    return redirect(url_for('dashboard.index'))


def register_error_handlers(app):
    """Register error handlers with Flask app."""

    @app.errorhandler(StudyMateError)
    def handle_studymate_error(error):
        current_app.logger.info(f"{error.code}: {error.message} ({request.path})")
        if wants_json():
            return jsonify(error.to_dict()), error.status_code
        flash(error.message, 'error')
        return _redirect_back(error.redirect_endpoint)

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        current_app.logger.warning(f"CSRF validation failed on {request.path}: {error.description}")
        if wants_json():
            return error_response('Invalid request. Please try again.', 'CSRF_ERROR', 400)
        flash('Invalid request. Please try again.', 'error')
        return redirect(request.referrer or url_for('landing.index'))

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        current_app.logger.exception('Database error')
        if wants_json():
            return error_response(GENERIC_ERROR_MESSAGE, 'DATABASE_ERROR', 500)
        flash(GENERIC_ERROR_MESSAGE, 'error')
        return _redirect_back()

    @app.errorhandler(404)
    def handle_not_found(error):
        if wants_json():
            return error_response('Not found', 'NOT_FOUND', 404)
        return render_template('errors/404.html'), 404

    @app.errorhandler(413)
    def handle_too_large(error):
        message = 'The uploaded file is too large.'
        if wants_json():
            return error_response(message, 'PAYLOAD_TOO_LARGE', 413)
        flash(message, 'error')
        return redirect(request.referrer or url_for('dashboard.index'))

    @app.errorhandler(500)
    def handle_internal_error(error):
        current_app.logger.exception('Internal server error')
        if wants_json():
            return error_response('Internal server error', 'SERVER_ERROR', 500)
        return render_template('errors/500.html'), 500
