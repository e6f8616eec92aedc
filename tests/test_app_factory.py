import os
import subprocess
import sys

import pytest

from studymate_app import create_app, db

from conftest import TestConfig

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.mark.parametrize('first_import', [
    'studymate_app.modules.study_modules.services',
    'studymate_app.modules.notes.services',
    'studymate_app.modules.dashboard.services',
    'studymate_app.models',
])
def test_package_imports_in_fresh_interpreter(first_import):
    # Import order matters for cycles, so each order runs in a clean interpreter.
    code = f'import {first_import}; import studymate_app.models; from studymate_app import create_app'
    result = subprocess.run([sys.executable, '-c', code], cwd=PROJECT_ROOT,
                            capture_output=True, text=True)
    assert result.returncode == 0, result.stderr


def test_module_routes_registered(app):
    endpoints = {rule.endpoint for rule in app.url_map.iter_rules()}
    for endpoint in ('landing.index', 'auth.login', 'notes.index', 'activity.index'):
        assert endpoint in endpoints


def test_second_app_gets_routes_too(app, tmp_path):
    config_class = type('SecondAppConfig', (TestConfig,), {'UPLOAD_FOLDER': str(tmp_path / 'second')})
    other = create_app(config_class)
    endpoints = {rule.endpoint for rule in other.url_map.iter_rules()}
    assert 'notes.index' in endpoints
    with other.app_context():
        db.session.remove()
        db.drop_all()


def test_sqlite_file_directory_created(tmp_path):
    database_file = tmp_path / 'data' / 'nested' / 'studymate.db'
    config_class = type('FileDatabaseConfig', (TestConfig,), {
        'SQLALCHEMY_DATABASE_URI': f'sqlite:///{database_file}',
        'UPLOAD_FOLDER': str(tmp_path / 'uploads'),
    })
    app = create_app(config_class)
    assert database_file.parent.is_dir()
    with app.app_context():
        db.session.remove()
        db.engine.dispose()
