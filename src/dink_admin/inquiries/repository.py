from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol


class InquiryRepository(Protocol):
    def list_inquiries(self, *, status: Optional[str], search: Optional[str]) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def get_inquiry(self, inquiry_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def update_inquiry(self, inquiry_id: str, fields: Dict[str, Any]) -> None:
        raise NotImplementedError

    def list_responses(self, inquiry_id: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def add_response(self, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def log_email(self, params: Dict[str, Any]) -> None:
        raise NotImplementedError
