from flask import render_template, request
from flask_login import current_user, login_required

from studymate_app.utils.pagination import get_pagination_data

from . import activity_bp
from .services import ActivityService


@activity_bp.app_template_filter('describe_activity')
def describe_activity_filter(entry):
    return ActivityService.describe(entry)


@activity_bp.route('/activity')
@login_required
def index():
    pagination = get_pagination_data(
        ActivityService.build_feed_query(current_user.user_id),
        request.args.get('page', 1, type=int),
        per_page=25,
    )
    return render_template('activity/index.html', pagination=pagination, entries=pagination.items)
