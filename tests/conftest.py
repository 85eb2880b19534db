"""
Test configuration for the impact points engine.
"""
import pytest


@pytest.fixture
def progression_rewards(db):
    """Default progression reward definitions."""
    from tests.factories import seed_progression_rewards
    return seed_progression_rewards()


@pytest.fixture
def basic_user(db):
    """Create a test user with a fresh Basic membership."""
    from tests.factories import create_user_with_membership
    user, membership = create_user_with_membership()
    return user


@pytest.fixture
def silver_user(db):
    """Create a test user with Silver membership."""
    from tests.factories import create_user_with_membership
    user, membership = create_user_with_membership('silver', 20)
    return user


@pytest.fixture
def staff_user(db):
    from tests.factories import StaffUserFactory
    return StaffUserFactory()


@pytest.fixture
def api_client():
    from rest_framework.test import APIClient
    return APIClient()
