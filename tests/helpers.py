"""Shared identifiers for Lay-Z Spa tests."""

TEST_TOKEN = "test_user_token"
TEST_DEVICE_ID = "did123"
