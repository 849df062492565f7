"""Shared fixtures: sample aggregate and a mocked cabinet backend."""

from unittest.mock import Mock

import pytest

from minddy_cabinet.application.interfaces import ICabinetAPI, INotificationService
from minddy_cabinet.domain.entities import (
    AITwin, FullProfile, InitialQuestion, Psychologist, PsychologistProfile
)
from minddy_cabinet.domain.value_objects import TelegramId


@pytest.fixture
def psychologist():
    return Psychologist(
        id="psy-1",
        telegram_id=TelegramId(123456789),
        created_at="2025-01-10T12:00:00Z",
        username="anna_psy",
        first_name="Анна",
        last_name="Иванова"
    )


@pytest.fixture
def profile_details():
    return PsychologistProfile(
        id="prof-1",
        psychologist_id="psy-1",
        display_name="Анна Иванова",
        bio="Гештальт-терапевт"
    )


@pytest.fixture
def ai_twin():
    return AITwin(
        id="twin-1",
        psychologist_id="psy-1",
        greeting="Привет! Что тебя беспокоит?",
        system_prompt="Ты психолог-консультант.",
        is_published=False
    )


@pytest.fixture
def questions():
    return (
        InitialQuestion(id="q-1", ai_twin_id="twin-1", question="Как вас зовут?", order_index=0),
        InitialQuestion(id="q-2", ai_twin_id="twin-1", question="Что привело вас?", order_index=1),
    )


@pytest.fixture
def full_profile(psychologist, profile_details, ai_twin, questions):
    return FullProfile(
        psychologist=psychologist,
        profile=profile_details,
        ai_twin=ai_twin,
        questions=questions
    )


@pytest.fixture
def api():
    """Mock backend; async methods are AsyncMock, session switches return itself"""
    mock = Mock(spec=ICabinetAPI)
    mock.with_session.return_value = mock
    mock.without_session.return_value = mock
    return mock


@pytest.fixture
def notifier():
    mock = Mock(spec=INotificationService)
    mock.confirm.return_value = True
    return mock
