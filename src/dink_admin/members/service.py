from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..common.validators import optional_text, parse_positive_int, require_bool, require_non_empty
from ..core.constants import GUESTS_PAGE_SIZE, MEMBERS_PAGE_SIZE, PENDING_DUPR_LIMIT
from ..core.exceptions import ValidationError
from ..database.supabase_base import page_range
from .model import GuestPage, Member, MemberPage
from .repository import MemberRepository


class MemberService:
    """Member, guest and DUPR verification use cases."""

    def __init__(self, repo: MemberRepository):
        self._repo = repo

    def list_members(
        self,
        *,
        page: Any = 1,
        search: Optional[str] = None,
        dupr_status: Optional[str] = None,
        membership_level: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        params = {
            "p_page": parse_positive_int(page, 1),
            "p_page_size": MEMBERS_PAGE_SIZE,
            "p_search": optional_text(search),
            "p_dupr_status": optional_text(dupr_status),
            "p_membership_level": optional_text(membership_level),
        }
        return self._repo.list_members(params)

    def member_page(self, **filters) -> MemberPage:
        page = parse_positive_int(filters.get("page"), 1)
        data = self.list_members(**filters)
        return MemberPage.from_rpc(data, page=page, page_size=MEMBERS_PAGE_SIZE)

    def delete_member(self, player_id: Optional[str]) -> Dict[str, Any]:
        player_id = require_non_empty(player_id, "Player ID is required")
        data = self._repo.delete_member(player_id)
        if data and not data.get("success"):
            raise ValidationError(data.get("error") or "Failed to delete player")
        return {"success": True, "message": "Player deleted successfully", "data": data}

    def verify_dupr(self, player_id: str, body: Dict[str, Any]) -> Any:
        verified_by = body.get("verified_by")
        if not verified_by:
            raise ValidationError("verified_by is required")
        verified = body.get("verified")
        if not isinstance(verified, bool):
            raise ValidationError("verified must be a boolean")
        return self._repo.verify_dupr(
            {
                "p_player_id": player_id,
                "p_verified": verified,
                "p_verified_by": verified_by,
                "p_notes": body.get("notes") or None,
            }
        )

    def list_guests(self, *, page: Any = 1, search: Optional[str] = None) -> GuestPage:
        page = parse_positive_int(page, 1)
        start, end = page_range(page, GUESTS_PAGE_SIZE)
        found, count = self._repo.list_guests(start=start, end=end, search=optional_text(search))
        return GuestPage(
            guests=[Member.from_row(r) for r in found],
            total=count,
            page=page,
            total_pages=-(-count // GUESTS_PAGE_SIZE),
        )

    def pending_dupr_verifications(self) -> List[Dict[str, Any]]:
        data = self._repo.pending_dupr_verifications(limit=PENDING_DUPR_LIMIT, offset=0)
        if data and data.get("success") and data.get("data"):
            return list(data["data"])
        return []

    def verify_player_dupr(
        self, *, player_id: Optional[str], admin_id: Optional[str], verified: Any, notes: Optional[str] = None
    ) -> Dict[str, Any]:
        player_id = require_non_empty(player_id, "Player ID is required")
        admin_id = require_non_empty(admin_id, "Admin ID is required")
        data = self._repo.verify_player_dupr(
            {
                "p_player_id": player_id,
                "p_admin_id": admin_id,
                "p_verified": require_bool(verified, "verified"),
                "p_notes": optional_text(notes),
            }
        )
        if not data or not data.get("success"):
            raise ValidationError((data or {}).get("error") or "Failed to process verification")
        return data
