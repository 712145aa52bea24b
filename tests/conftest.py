import pytest

from student_api.config import Settings


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        STORE_BACKEND="supabase",
        SUPABASE_URL="https://project.supabase.co",
        SUPABASE_KEY="supabase-key",
        TWILIO_ACCOUNT_SID="AC123",
        TWILIO_AUTH_TOKEN="twilio-token",
        TWILIO_PHONE_NUMBER="+15550001111",
        JWT_SECRET="test-secret",
    )
