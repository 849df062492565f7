"""
Unit Tests: Cabinet Panels

Тестирует панели кабинета:
- ProfileEditor: сохранение, защита от двойного клика
- AITwinEditor: сохранение только измененных частей, подсказки
- ChatPreview: оптимистичная отправка, удаление чатов
- PublishPanel: проверка требований, публикация и отмена
"""

import asyncio
from dataclasses import replace
from unittest.mock import Mock

import pytest

from minddy_cabinet.application.dto import PublishResultDTO, SuggestionField
from minddy_cabinet.domain.entities import (
    AITwin, FullProfile, InitialQuestion, MessageRole, MessageStatus, PreviewChat, PreviewMessage
)
from minddy_cabinet.domain.exceptions import RequestFailedError
from minddy_cabinet.presentation.cabinet import (
    AITwinEditor, ChatPreview, ProfileEditor, PublishPanel
)
from minddy_cabinet.presentation.cabinet.ai_twin_editor import SUGGESTION_ERROR
from minddy_cabinet.presentation.cabinet.chat_preview import SEND_ERROR
from minddy_cabinet.presentation.cabinet.profile_editor import SAVE_ERROR
from minddy_cabinet.presentation.cabinet.publish_panel import PUBLISH_REQUIREMENTS_ALERT


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def on_update():
    return Mock()


@pytest.fixture
def chat():
    return PreviewChat(
        id="chat-1", psychologist_id="psy-1", ai_twin_id="twin-1",
        title="Тест", created_at="t", updated_at="t"
    )


@pytest.fixture
def other_chat():
    return PreviewChat(
        id="chat-2", psychologist_id="psy-1", ai_twin_id="twin-1",
        title="Тест 2", created_at="t", updated_at="t"
    )


@pytest.fixture
def preview(api, full_profile, notifier, chat, other_chat):
    panel = ChatPreview(api, full_profile, notifier)
    panel.chats = [chat, other_chat]
    panel.active_chat = chat
    return panel


# ============================================================================
# PROFILE EDITOR
# ============================================================================

def test_profile_editor_initial_draft(api, full_profile, on_update, notifier):
    editor = ProfileEditor(api, full_profile, on_update, notifier)

    assert editor.display_name == "Анна Иванова"
    assert editor.bio == "Гештальт-терапевт"
    assert editor.education == ""


@pytest.mark.asyncio
async def test_profile_save_merges_only_profile_slice(
    api, full_profile, profile_details, on_update, notifier
):
    """
    Тест: Сохранение профиля не меняет AI-двойника и вопросы
    """
    updated = replace(profile_details, education="МГУ")
    api.update_profile.return_value = updated
    editor = ProfileEditor(api, full_profile, on_update, notifier)
    editor.education = "МГУ"

    assert await editor.save() is True

    dto = api.update_profile.await_args.args[0]
    assert dto.to_payload() == {
        "display_name": "Анна Иванова", "bio": "Гештальт-терапевт", "education": "МГУ"
    }
    new_profile = on_update.call_args.args[0]
    assert new_profile.profile == updated
    assert new_profile.ai_twin is full_profile.ai_twin
    assert new_profile.questions is full_profile.questions
    assert editor.is_saved


@pytest.mark.asyncio
async def test_profile_save_failure_alerts(api, full_profile, on_update, notifier):
    """
    Тест: Ошибка сохранения показывает alert и не трогает агрегат
    """
    api.update_profile.side_effect = RequestFailedError("HTTP 500", status_code=500)
    editor = ProfileEditor(api, full_profile, on_update, notifier)
    editor.bio = "новое"

    assert await editor.save() is False

    notifier.alert.assert_called_once_with(SAVE_ERROR)
    on_update.assert_not_called()
    assert editor.profile is full_profile
    assert editor.bio == "новое"
    assert not editor.is_loading
    assert not editor.is_saved


@pytest.mark.asyncio
async def test_double_click_save_sends_one_request(
    api, full_profile, profile_details, on_update, notifier
):
    """
    Тест: Повторное нажатие во время запроса не создает второй запрос
    """
    release = asyncio.Event()

    async def slow_update(dto):
        await release.wait()
        return profile_details

    api.update_profile.side_effect = slow_update
    editor = ProfileEditor(api, full_profile, on_update, notifier)

    first = asyncio.create_task(editor.save())
    await asyncio.sleep(0)
    assert editor.is_loading

    second = await editor.save()
    release.set()

    assert second is False
    assert await first is True
    assert api.update_profile.await_count == 1


# ============================================================================
# AI TWIN EDITOR
# ============================================================================

def test_twin_editor_question_list_never_empty(api, notifier, on_update):
    editor = AITwinEditor(api, FullProfile(), on_update, notifier)

    assert editor.questions == [""]

    editor.update_question(0, "Как вы?")
    editor.add_question()
    assert editor.questions == ["Как вы?", ""]

    editor.remove_question(0)
    editor.remove_question(0)
    assert editor.questions == [""]


@pytest.mark.asyncio
async def test_saving_persona_keeps_question_list(api, full_profile, ai_twin, on_update, notifier):
    """
    Тест: Изменение приветствия не отправляет и не меняет список вопросов
    """
    updated_twin = replace(ai_twin, greeting="Здравствуйте")
    api.update_ai_twin.return_value = updated_twin
    editor = AITwinEditor(api, full_profile, on_update, notifier)
    editor.greeting = "Здравствуйте"

    assert await editor.save() is True

    api.update_questions.assert_not_awaited()
    new_profile = on_update.call_args.args[0]
    assert new_profile.ai_twin == updated_twin
    assert new_profile.questions == full_profile.questions
    assert new_profile.profile == full_profile.profile


@pytest.mark.asyncio
async def test_saving_questions_drops_blank_rows(api, full_profile, on_update, notifier):
    saved = [
        InitialQuestion(id="q-9", ai_twin_id="twin-1", question="Новый", order_index=0),
    ]
    api.update_questions.return_value = saved
    editor = AITwinEditor(api, full_profile, on_update, notifier)
    editor.questions = ["Новый", "   ", ""]

    assert await editor.save() is True

    api.update_questions.assert_awaited_once_with(["Новый"])
    api.update_ai_twin.assert_not_awaited()
    assert on_update.call_args.args[0].question_texts == ["Новый"]


@pytest.mark.asyncio
async def test_twin_save_without_changes_makes_no_calls(api, full_profile, on_update, notifier):
    editor = AITwinEditor(api, full_profile, on_update, notifier)

    assert await editor.save() is True

    api.update_ai_twin.assert_not_awaited()
    api.update_questions.assert_not_awaited()
    on_update.assert_not_called()


@pytest.mark.asyncio
async def test_twin_save_partial_failure_keeps_aggregate(api, full_profile, ai_twin, on_update, notifier):
    api.update_ai_twin.return_value = replace(ai_twin, greeting="Новое")
    api.update_questions.side_effect = RequestFailedError("HTTP 500", status_code=500)
    editor = AITwinEditor(api, full_profile, on_update, notifier)
    editor.greeting = "Новое"
    editor.questions = ["Один"]

    assert await editor.save() is False

    on_update.assert_not_called()
    assert editor.profile is full_profile
    notifier.alert.assert_called_once()


@pytest.mark.asyncio
async def test_suggest_replaces_draft(api, full_profile, on_update, notifier):
    """
    Тест: Подсказка заменяет поле целиком, вопросы разбиваются по строкам
    """
    editor = AITwinEditor(api, full_profile, on_update, notifier)

    api.get_suggestion.return_value = "Добрый день!"
    assert await editor.suggest(SuggestionField.GREETING) is True
    assert editor.greeting == "Добрый день!"

    api.get_suggestion.return_value = "Первый?\n\nВторой?\n"
    assert await editor.suggest("questions") is True
    assert editor.questions == ["Первый?", "Второй?"]
    assert not editor.is_suggesting(SuggestionField.QUESTIONS)


@pytest.mark.asyncio
async def test_suggest_failure_keeps_draft(api, full_profile, on_update, notifier):
    api.get_suggestion.side_effect = RequestFailedError("HTTP 503", status_code=503)
    editor = AITwinEditor(api, full_profile, on_update, notifier)
    editor.system_prompt = "мой черновик"

    assert await editor.suggest(SuggestionField.SYSTEM_PROMPT) is False

    assert editor.system_prompt == "мой черновик"
    notifier.alert.assert_called_once_with(SUGGESTION_ERROR)


# ============================================================================
# CHAT PREVIEW
# ============================================================================

@pytest.mark.asyncio
async def test_send_appends_user_then_assistant(preview, api):
    """
    Тест: "Hello" появляется сразу, затем ровно один ответ ассистента
    """
    release = asyncio.Event()

    async def reply(chat_id, message):
        await release.wait()
        return "Привет! Как вы?"

    api.send_preview_message.side_effect = reply

    task = asyncio.create_task(preview.send_message("Hello"))
    await asyncio.sleep(0)

    assert [m.content for m in preview.messages] == ["Hello"]
    assert preview.messages[0].status == MessageStatus.PENDING
    assert preview.input_value == ""

    release.set()
    assert await task is True

    assert [m.role for m in preview.messages] == [MessageRole.USER, MessageRole.ASSISTANT]
    assert preview.messages[0].content == "Hello"
    assert preview.messages[0].status == MessageStatus.CONFIRMED
    assert preview.messages[1].content == "Привет! Как вы?"
    api.send_preview_message.assert_awaited_once_with("chat-1", "Hello")


@pytest.mark.asyncio
async def test_send_failure_keeps_user_message(preview, api, notifier):
    """
    Тест: При ошибке сообщение пользователя остается, ответа нет, показан alert
    """
    api.send_preview_message.side_effect = RequestFailedError("HTTP 500", status_code=500)

    assert await preview.send_message("Hello") is False

    assert len(preview.messages) == 1
    assert preview.messages[0].content == "Hello"
    assert preview.messages[0].role == MessageRole.USER
    assert not preview.is_sending
    notifier.alert.assert_called_once_with(SEND_ERROR)


@pytest.mark.asyncio
async def test_send_ignores_blank_input_and_missing_chat(preview, api):
    assert await preview.send_message("   ") is False

    preview.active_chat = None
    assert await preview.send_message("Hello") is False

    api.send_preview_message.assert_not_awaited()
    assert preview.messages == []


@pytest.mark.asyncio
async def test_delete_selected_chat_clears_selection(preview, api):
    """
    Тест: Удаление выбранного чата сбрасывает выбор и сообщения
    """
    preview.messages = [PreviewMessage(
        id="m-1", chat_id="chat-1", role=MessageRole.USER, content="Hi", created_at="t"
    )]

    assert await preview.delete_chat("chat-1") is True

    api.delete_preview_chat.assert_awaited_once_with("chat-1")
    assert preview.active_chat is None
    assert preview.messages == []
    assert [c.id for c in preview.chats] == ["chat-2"]


@pytest.mark.asyncio
async def test_delete_other_chat_keeps_selection(preview, api, chat):
    assert await preview.delete_chat("chat-2") is True

    assert preview.active_chat == chat


@pytest.mark.asyncio
async def test_delete_cancelled(preview, api, notifier):
    notifier.confirm.return_value = False

    assert await preview.delete_chat("chat-1") is False

    api.delete_preview_chat.assert_not_awaited()
    assert len(preview.chats) == 2


@pytest.mark.asyncio
async def test_create_chat_is_selected_first(preview, api):
    new_chat = PreviewChat(
        id="chat-3", psychologist_id="psy-1", ai_twin_id="twin-1",
        title="Тест 3", created_at="t", updated_at="t"
    )
    api.create_preview_chat.return_value = new_chat

    assert await preview.create_chat() == new_chat

    assert preview.chats[0] == new_chat
    assert preview.active_chat == new_chat
    assert preview.messages == []
    assert api.create_preview_chat.await_args.args[0].startswith("Тест ")


@pytest.mark.asyncio
async def test_double_click_create_chat_creates_one(preview, api):
    """
    Тест: Повторное создание чата во время запроса не создает второй чат
    """
    release = asyncio.Event()
    new_chat = PreviewChat(
        id="chat-3", psychologist_id="psy-1", ai_twin_id="twin-1",
        title="Тест 3", created_at="t", updated_at="t"
    )

    async def slow_create(title):
        await release.wait()
        return new_chat

    api.create_preview_chat.side_effect = slow_create

    first = asyncio.create_task(preview.create_chat())
    await asyncio.sleep(0)
    assert preview.is_creating

    second = await preview.create_chat()
    release.set()

    assert second is None
    assert await first == new_chat
    assert api.create_preview_chat.await_count == 1
    assert [c.id for c in preview.chats] == ["chat-3", "chat-1", "chat-2"]
    assert not preview.is_creating


@pytest.mark.asyncio
async def test_double_click_delete_chat_deletes_once(preview, api, notifier):
    """
    Тест: Повторное удаление того же чата во время запроса игнорируется
    """
    release = asyncio.Event()

    async def slow_delete(chat_id):
        await release.wait()

    api.delete_preview_chat.side_effect = slow_delete

    first = asyncio.create_task(preview.delete_chat("chat-2"))
    await asyncio.sleep(0)

    second = await preview.delete_chat("chat-2")
    release.set()

    assert second is False
    assert await first is True
    assert api.delete_preview_chat.await_count == 1
    assert notifier.confirm.call_count == 1
    notifier.alert.assert_not_called()


@pytest.mark.asyncio
async def test_failed_create_releases_busy_flag(preview, api, notifier):
    api.create_preview_chat.side_effect = RequestFailedError("HTTP 500", status_code=500)

    assert await preview.create_chat() is None

    assert not preview.is_creating
    notifier.alert.assert_called_once()
    assert len(preview.chats) == 2


@pytest.mark.asyncio
async def test_select_chat_loads_messages(preview, api, other_chat):
    message = PreviewMessage(
        id="m-1", chat_id="chat-2", role=MessageRole.ASSISTANT, content="Привет", created_at="t"
    )
    api.get_preview_messages.return_value = [message]

    await preview.select_chat(other_chat)

    assert preview.active_chat == other_chat
    assert preview.messages == [message]


@pytest.mark.asyncio
async def test_load_chats_failure_is_logged_only(preview, api, notifier):
    api.get_preview_chats.side_effect = RequestFailedError("HTTP 500", status_code=500)

    await preview.load_chats()

    notifier.alert.assert_not_called()
    assert not preview.is_loading


# ============================================================================
# PUBLISH PANEL
# ============================================================================

@pytest.mark.asyncio
@pytest.mark.parametrize("greeting,system_prompt", [
    ("", "Ты психолог"),
    ("Привет", ""),
    ("", ""),
])
async def test_publish_blocked_without_required_fields(
    api, full_profile, on_update, notifier, greeting, system_prompt
):
    """
    Тест: Без приветствия или промпта запрос публикации не отправляется
    """
    twin = AITwin(
        id="twin-1", psychologist_id="psy-1", greeting=greeting, system_prompt=system_prompt
    )
    panel = PublishPanel(api, full_profile.with_ai_twin(twin), on_update, notifier)

    assert await panel.publish() is False

    api.publish.assert_not_awaited()
    notifier.alert.assert_called_once_with(PUBLISH_REQUIREMENTS_ALERT)


@pytest.mark.asyncio
async def test_publish_refreshes_profile(api, full_profile, ai_twin, on_update, notifier):
    published = full_profile.with_ai_twin(replace(ai_twin, is_published=True, share_code="abc"))
    api.publish.return_value = PublishResultDTO(
        share_code="abc", share_url="https://t.me/minddy_bot?start=psy_abc"
    )
    api.get_profile.return_value = published
    panel = PublishPanel(api, full_profile, on_update, notifier)

    assert panel.can_publish
    assert await panel.publish() is True

    on_update.assert_called_once_with(published)
    assert panel.is_published
    assert panel.current_share_url == "https://t.me/minddy_bot?start=psy_abc"


def test_share_url_built_from_share_code(api, full_profile, ai_twin, on_update, notifier):
    profile = full_profile.with_ai_twin(replace(ai_twin, is_published=True, share_code="xyz"))
    panel = PublishPanel(api, profile, on_update, notifier, bot_username="test_bot")

    assert panel.current_share_url == "https://t.me/test_bot?start=psy_xyz"


def test_checklist(api, full_profile, on_update, notifier):
    panel = PublishPanel(api, replace(full_profile, questions=None), on_update, notifier)

    items = {item.label: item for item in panel.checklist()}

    assert items["Приветствие заполнено"].checked
    assert items["Системный промпт настроен"].checked
    assert not items["Добавлены первые вопросы"].checked
    assert items["Добавлены первые вопросы"].optional
    assert items["Заполнен профиль"].checked


@pytest.mark.asyncio
async def test_unpublish_requires_confirmation(api, full_profile, on_update, notifier):
    notifier.confirm.return_value = False
    panel = PublishPanel(api, full_profile, on_update, notifier)

    assert await panel.unpublish() is False

    api.unpublish.assert_not_awaited()


@pytest.mark.asyncio
async def test_unpublish_failure_alerts(api, full_profile, on_update, notifier):
    api.unpublish.side_effect = RequestFailedError("HTTP 500", status_code=500)
    panel = PublishPanel(api, full_profile, on_update, notifier)

    assert await panel.unpublish() is False

    notifier.alert.assert_called_once()
    on_update.assert_not_called()
    assert not panel.is_loading
