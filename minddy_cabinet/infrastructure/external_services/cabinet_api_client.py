"""Cabinet backend client over HTTP+JSON."""

import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

import httpx

from ...application.dto import (
    AuthResultDTO, PublishResultDTO, SuggestionField, UpdateAITwinDTO, UpdateProfileDTO
)
from ...application.interfaces import ICabinetAPI
from ...domain.entities import (
    AITwin, FullProfile, InitialQuestion, MessageRole, PreviewChat, PreviewMessage,
    Psychologist, PsychologistProfile
)
from ...domain.exceptions import RequestFailedError
from ...domain.value_objects import Session, TelegramAuthData, TelegramId

logger = logging.getLogger(__name__)

DEFAULT_CHAT_TITLE = "Test Chat"

T = TypeVar("T")


class CabinetAPIClient(ICabinetAPI):
    """ICabinetAPI implementation on top of ``httpx.AsyncClient``.
    
    One attempt per call: no retries and no timeout. Clients derived with
    ``with_session``/``without_session`` share the underlying connection pool,
    so only the root client needs to be closed.
    """
    
    def __init__(
        self,
        base_url: str,
        session: Optional[Session] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._http = http_client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=None
        )
    
    @property
    def session(self) -> Optional[Session]:
        return self._session
    
    def with_session(self, session: Session) -> "CabinetAPIClient":
        return CabinetAPIClient(self.base_url, session=session, http_client=self._http)
    
    def without_session(self) -> "CabinetAPIClient":
        return CabinetAPIClient(self.base_url, session=None, http_client=self._http)
    
    async def close(self) -> None:
        await self._http.aclose()
    
    # Auth
    
    async def authenticate(self, auth_data: TelegramAuthData) -> AuthResultDTO:
        data = await self._request("POST", "/api/auth/telegram", json=auth_data.to_payload())
        return self._decode("POST /api/auth/telegram", data, lambda d: AuthResultDTO(
            token=d["token"],
            psychologist=self._to_psychologist(d["psychologist"]),
            is_new=bool(d.get("is_new", False))
        ))
    
    # Profile
    
    async def get_profile(self) -> FullProfile:
        data = await self._request("GET", "/api/profile")
        return self._decode("GET /api/profile", data, self._to_full_profile)
    
    async def update_profile(self, dto: UpdateProfileDTO) -> PsychologistProfile:
        data = await self._request("PUT", "/api/profile", json=dto.to_payload())
        return self._decode("PUT /api/profile", data, self._to_profile)
    
    # AI twin
    
    async def update_ai_twin(self, dto: UpdateAITwinDTO) -> AITwin:
        data = await self._request("PUT", "/api/ai-twin", json=dto.to_payload())
        return self._decode("PUT /api/ai-twin", data, self._to_ai_twin)
    
    async def update_questions(self, questions: List[str]) -> List[InitialQuestion]:
        data = await self._request(
            "PUT", "/api/ai-twin/questions", json={"questions": list(questions)}
        )
        return self._decode(
            "PUT /api/ai-twin/questions", data or [], lambda d: [self._to_question(q) for q in d]
        )
    
    async def publish(self) -> PublishResultDTO:
        data = await self._request("POST", "/api/ai-twin/publish")
        return self._decode("POST /api/ai-twin/publish", data, lambda d: PublishResultDTO(
            share_code=d["share_code"], share_url=d["share_url"]
        ))
    
    async def unpublish(self) -> None:
        await self._request("POST", "/api/ai-twin/unpublish")
    
    # Suggestions
    
    async def get_suggestion(
        self,
        field: SuggestionField,
        context: Optional[str] = None
    ) -> str:
        data = await self._request(
            "POST",
            "/api/suggest",
            json={"field": SuggestionField(field).value, "context": context}
        )
        return self._decode("POST /api/suggest", data, lambda d: d["suggestion"])
    
    # Preview chats
    
    async def get_preview_chats(self) -> List[PreviewChat]:
        data = await self._request("GET", "/api/preview-chats")
        return self._decode(
            "GET /api/preview-chats", data or [], lambda d: [self._to_chat(c) for c in d]
        )
    
    async def create_preview_chat(self, title: Optional[str] = None) -> PreviewChat:
        data = await self._request(
            "POST", "/api/preview-chats", json={"title": title or DEFAULT_CHAT_TITLE}
        )
        return self._decode("POST /api/preview-chats", data, self._to_chat)
    
    async def delete_preview_chat(self, chat_id: str) -> None:
        await self._request("DELETE", f"/api/preview-chats/{chat_id}")
    
    async def get_preview_messages(self, chat_id: str) -> List[PreviewMessage]:
        endpoint = f"/api/preview-chats/{chat_id}/messages"
        data = await self._request("GET", endpoint)
        return self._decode(
            f"GET {endpoint}", data or [], lambda d: [self._to_message(m) for m in d]
        )
    
    async def send_preview_message(self, chat_id: str, message: str) -> str:
        endpoint = f"/api/preview-chats/{chat_id}/messages"
        data = await self._request("POST", endpoint, json={"message": message})
        return self._decode(f"POST {endpoint}", data, lambda d: d["response"])
    
    async def _request(
        self,
        method: str,
        endpoint: str,
        json: Optional[Any] = None
    ) -> Any:
        """Send one request and decode the JSON answer."""
        
        headers = {"Content-Type": "application/json"}
        if self._session:
            headers.update(self._session.headers())
        
        try:
            response = await self._http.request(method, endpoint, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            raise RequestFailedError(str(e) or type(e).__name__)
        
        if not response.is_success:
            message = self._error_message(response)
            logger.warning(f"{method} {endpoint} -> {response.status_code}: {message}")
            raise RequestFailedError(message, status_code=response.status_code)
        
        if not response.content:
            return None
        
        try:
            return response.json()
        except ValueError:
            raise RequestFailedError(
                f"Invalid JSON in response to {method} {endpoint}",
                status_code=response.status_code
            )
    
    @staticmethod
    def _decode(operation: str, data: Any, mapper: Callable[[Any], T]) -> T:
        """Map a successful body; a body of the wrong shape is a failed request."""
        
        try:
            return mapper(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Malformed response to {operation}: {type(e).__name__} {e}")
            raise RequestFailedError(f"Malformed response to {operation}")
    
    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return "Unknown error"
        
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"HTTP {response.status_code}"
    
    def _to_full_profile(self, data: Dict[str, Any]) -> FullProfile:
        psychologist = data.get("psychologist")
        profile = data.get("profile")
        ai_twin = data.get("ai_twin")
        questions = data.get("questions")
        
        return FullProfile(
            psychologist=self._to_psychologist(psychologist) if psychologist else None,
            profile=self._to_profile(profile) if profile else None,
            ai_twin=self._to_ai_twin(ai_twin) if ai_twin else None,
            questions=tuple(self._to_question(q) for q in questions) if questions is not None else None
        )
    
    @staticmethod
    def _to_psychologist(data: Dict[str, Any]) -> Psychologist:
        return Psychologist(
            id=data["id"],
            telegram_id=TelegramId.from_string(data["telegram_id"]),
            created_at=data.get("created_at", ""),
            username=data.get("username"),
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            photo_url=data.get("photo_url")
        )
    
    @staticmethod
    def _to_profile(data: Dict[str, Any]) -> PsychologistProfile:
        return PsychologistProfile(
            id=data["id"],
            psychologist_id=data["psychologist_id"],
            display_name=data.get("display_name"),
            bio=data.get("bio"),
            education=data.get("education"),
            specializations=data.get("specializations"),
            experience=data.get("experience")
        )
    
    @staticmethod
    def _to_ai_twin(data: Dict[str, Any]) -> AITwin:
        return AITwin(
            id=data["id"],
            psychologist_id=data["psychologist_id"],
            greeting=data.get("greeting") or "",
            system_prompt=data.get("system_prompt") or "",
            is_published=bool(data.get("is_published", False)),
            share_code=data.get("share_code")
        )
    
    @staticmethod
    def _to_question(data: Dict[str, Any]) -> InitialQuestion:
        return InitialQuestion(
            id=data["id"],
            ai_twin_id=data["ai_twin_id"],
            question=data["question"],
            order_index=int(data["order_index"])
        )
    
    @staticmethod
    def _to_chat(data: Dict[str, Any]) -> PreviewChat:
        return PreviewChat(
            id=data["id"],
            psychologist_id=data["psychologist_id"],
            ai_twin_id=data["ai_twin_id"],
            title=data["title"],
            created_at=data["created_at"],
            updated_at=data["updated_at"]
        )
    
    @staticmethod
    def _to_message(data: Dict[str, Any]) -> PreviewMessage:
        return PreviewMessage(
            id=data["id"],
            chat_id=data["chat_id"],
            role=MessageRole(data["role"]),
            content=data["content"],
            created_at=data["created_at"]
        )
