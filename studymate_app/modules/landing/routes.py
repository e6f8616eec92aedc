from flask import redirect, render_template, url_for
from flask_login import current_user

from . import landing_bp


@landing_bp.route('/')
def index():
    """Public home page; signed-in users go straight to their dashboard."""
    if current_user.is_authenticated:
        return redirect(url_for('dashboard.index'))
    return render_template('landing/index.html')
