from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .allowed_emails.service import AllowedEmailService
from .allowed_emails.supabase_allowed_email_repository import SupabaseAllowedEmailRepository
from .auth.provider import AuthProvider, SupabaseAuthProvider
from .auth.service import AuthService
from .auth.supabase_account_repository import SupabaseAccountRepository
from .bookings.service import BookingService
from .bookings.supabase_booking_repository import SupabaseBookingRepository
from .checkin.scanner import ScanDebouncer
from .checkin.service import CheckinService
from .crowdfunding.service import CrowdfundingService
from .crowdfunding.supabase_crowdfunding_repository import SupabaseCrowdfundingRepository
from .database.connection import SupabaseConfig, SupabaseConnection
from .employees.service import EmployeeService
from .employees.supabase_employee_repository import SupabaseEmployeeRepository
from .events.service import EventService
from .events.supabase_event_repository import SupabaseEventRepository
from .inquiries.mailer import SmtpConfig, SmtpMailer
from .inquiries.service import InquiryService
from .inquiries.supabase_inquiry_repository import SupabaseInquiryRepository
from .marketing.service import MarketingService
from .marketing.supabase_marketing_repository import SupabaseMarketingRepository
from .members.service import MemberService
from .members.supabase_member_repository import SupabaseMemberRepository
from .open_play.service import OpenPlayService
from .open_play.supabase_schedule_block_repository import SupabaseScheduleBlockRepository
from .subscribers.service import SubscriberService
from .subscribers.supabase_subscriber_repository import SupabaseSubscriberRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[SupabaseConnection]

    auth_provider: AuthProvider
    mailer: SmtpMailer

    allowed_email_service: AllowedEmailService
    auth_service: AuthService
    member_service: MemberService
    employee_service: EmployeeService
    event_service: EventService
    checkin_service: CheckinService
    open_play_service: OpenPlayService
    booking_service: BookingService
    subscriber_service: SubscriberService
    marketing_service: MarketingService
    inquiry_service: InquiryService
    crowdfunding_service: CrowdfundingService


def build_container(
    *,
    supabase_config: dict,
    smtp_config: Optional[dict] = None,
    site_url: str = "",
    logo_url: str = "",
    allow_unlisted_in_dev: bool = False,
) -> Container:
    config = SupabaseConfig(
        url=str(supabase_config.get("url") or ""),
        anon_key=str(supabase_config.get("anon_key") or ""),
        service_key=str(supabase_config.get("service_key") or ""),
    )
    conn = SupabaseConnection.get_instance(config)

    allowed_repo = SupabaseAllowedEmailRepository(conn)
    accounts_repo = SupabaseAccountRepository(conn)
    auth_provider = SupabaseAuthProvider(conn, anon_configured=bool(config.url and config.anon_key))
    mailer = SmtpMailer(SmtpConfig.from_mapping(smtp_config))

    auth_service = AuthService(allowed_repo, accounts_repo, auth_provider, allow_unlisted_in_dev=allow_unlisted_in_dev)
    event_service = EventService(SupabaseEventRepository(conn))

    return Container(
        conn=conn,
        auth_provider=auth_provider,
        mailer=mailer,
        allowed_email_service=AllowedEmailService(allowed_repo),
        auth_service=auth_service,
        member_service=MemberService(SupabaseMemberRepository(conn)),
        employee_service=EmployeeService(SupabaseEmployeeRepository(conn), auth_service),
        event_service=event_service,
        checkin_service=CheckinService(event_service, auth_service, ScanDebouncer()),
        open_play_service=OpenPlayService(SupabaseScheduleBlockRepository(conn)),
        booking_service=BookingService(SupabaseBookingRepository(conn)),
        subscriber_service=SubscriberService(SupabaseSubscriberRepository(conn)),
        marketing_service=MarketingService(SupabaseMarketingRepository(conn)),
        inquiry_service=InquiryService(
            SupabaseInquiryRepository(conn), mailer, site_url=site_url, logo_url=logo_url
        ),
        crowdfunding_service=CrowdfundingService(SupabaseCrowdfundingRepository(conn)),
    )
