import pytest

from studymate_app import create_app, db
from studymate_app.config import Config
from studymate_app.models import User

PASSWORD = 'Secret123'


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    WTF_CSRF_ENABLED = False
    MAIL_SUPPRESS_SEND = True
    SCHEDULER_ENABLED = False
    LOG_TO_FILE = False
    LOG_LEVEL = 'WARNING'
    APP_URL = 'http://studymate.test'


@pytest.fixture
def app(tmp_path):
    # Each test gets its own in-memory database and upload folder.
    config_class = type('IsolatedTestConfig', (TestConfig,), {'UPLOAD_FOLDER': str(tmp_path / 'uploads')})
    app = create_app(config_class)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def create_user(app, username, email=None, password=PASSWORD):
    with app.app_context():
        user = User(username=username, email=email or f'{username}@example.com')
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user.user_id


def login(client, identifier, password=PASSWORD):
    return client.post('/auth/login', data={'identifier': identifier, 'password': password})


@pytest.fixture
def alice(app):
    return create_user(app, 'alice')


@pytest.fixture
def bob(app):
    return create_user(app, 'bob')


@pytest.fixture
def alice_client(app, alice):
    client = app.test_client()
    login(client, 'alice')
    return client


@pytest.fixture
def bob_client(app, bob):
    client = app.test_client()
    login(client, 'bob')
    return client
