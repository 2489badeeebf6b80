import os
from datetime import datetime

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AWS_REGION"] = "us-east-1"
os.environ["USER_POOL_ID"] = "us-east-1_testpool"
os.environ["USER_POOL_CLIENT_ID"] = "test-client-id"
os.environ["AVATAR_BUCKET"] = "avatars-test"
os.environ["POST_BUCKET"] = "posts-test"

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from app.core.storage import S3ObjectStore
from app.db.base import Base
from app.db.session import SessionLocal, engine, get_db
from app.deps import get_credential_service, get_object_store
from app.main import app
from app.modules.auth.services.credentials import CognitoCredentialService
from app.modules.posts.models.post import Post
from app.modules.user_management.models.user import User


class StubS3Client:
    """Records uploads and signs URLs without talking to S3"""

    def __init__(self):
        self.put_calls = []
        self.presign_calls = []
        self.put_error = None

    def put_object(self, **kwargs):
        if self.put_error:
            raise self.put_error
        self.put_calls.append(kwargs)
        return {"ETag": '"stub"'}

    def generate_presigned_url(self, operation, Params, ExpiresIn):
        self.presign_calls.append((operation, Params, ExpiresIn))
        return f"https://{Params['Bucket']}.s3.test/{Params['Key']}?X-Amz-Expires={ExpiresIn}"


class StubCognitoClient:
    """Accepts `token-<sub>` access tokens and records every call"""

    def __init__(self):
        self.calls = []
        self.next_sub = "new-user-sub"
        self.error = None

    def _record(self, name, kwargs):
        self.calls.append((name, kwargs))
        if self.error:
            raise self.error

    def get_user(self, AccessToken):
        self.calls.append(("get_user", {}))
        if not AccessToken.startswith("token-"):
            raise ClientError(
                {"Error": {"Code": "NotAuthorizedException", "Message": "Invalid Access Token"}}, "GetUser"
            )
        sub = AccessToken[len("token-"):]
        return {"Username": f"user-{sub}", "UserAttributes": [{"Name": "sub", "Value": sub}]}

    def sign_up(self, **kwargs):
        self._record("sign_up", kwargs)
        return {"UserSub": self.next_sub, "UserConfirmed": False}

    def confirm_sign_up(self, **kwargs):
        self._record("confirm_sign_up", kwargs)
        return {}

    def initiate_auth(self, **kwargs):
        self._record("initiate_auth", kwargs)
        return {"AuthenticationResult": {"AccessToken": "access-abc", "RefreshToken": "refresh-abc"}}

    def forgot_password(self, **kwargs):
        self._record("forgot_password", kwargs)
        return {}

    def confirm_forgot_password(self, **kwargs):
        self._record("confirm_forgot_password", kwargs)
        return {}


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def s3_client():
    return StubS3Client()


@pytest.fixture()
def object_store(s3_client):
    return S3ObjectStore(client=s3_client)


@pytest.fixture()
def cognito_client():
    return StubCognitoClient()


@pytest.fixture()
def credential_service(cognito_client):
    return CognitoCredentialService(client=cognito_client)


@pytest.fixture()
def client(db, object_store, credential_service):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_object_store] = lambda: object_store
    app.dependency_overrides[get_credential_service] = lambda: credential_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db):
    def _make_user(cognito_id, name=None, following=None, followers=0, posts=0, avatar=None, email=None):
        user = User(
            cognito_id=cognito_id,
            name=name or f"User {cognito_id}",
            email=email or f"{cognito_id}@example.com",
            avatar=avatar,
            following=list(following or []),
            followers=followers,
            posts=posts,
        )
        db.add(user)
        db.commit()
        return user
    return _make_user


@pytest.fixture()
def make_post(db):
    def _make_post(post_id, user_id, date=None, image=None, description="A post description"):
        post = Post(
            id=post_id,
            user_id=user_id,
            description=description,
            date=date or datetime(2024, 1, 1, 12, 0, 0),
            image=image,
            likes=[],
            comments=[],
        )
        db.add(post)
        db.commit()
        return post
    return _make_post


def auth_headers(user_id):
    return {"Authorization": f"Bearer token-{user_id}"}


@pytest.fixture()
def headers():
    return auth_headers
