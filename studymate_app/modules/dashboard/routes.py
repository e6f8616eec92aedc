from flask import render_template
from flask_login import current_user, login_required

from . import dashboard_bp
from .services import DashboardService


@dashboard_bp.route('/dashboard')
@login_required
def index():
    user = current_user._get_current_object()
    return render_template(
        'dashboard/index.html',
        stats=DashboardService.get_user_stats(user),
        recent_notes=DashboardService.get_recent_notes(user),
        recent_activity=DashboardService.get_recent_activity(user),
    )
