"""Top-level journal composition.

``compose_journal`` owns one template for the duration of a run: it embeds the
fonts, hands a shared :class:`ComposeContext` to each section composer in
document order, seals each composer's pages, and serializes the result.
"""
from __future__ import annotations

from datetime import date, datetime
import logging
from pathlib import Path
from typing import Callable, List, Tuple, Union

from ..config import load_style_preset
from ..models import JournalBundle
from .context import ComposeContext
from .errors import CompositionError
from .images import ImageEmbedder, ImageFetcher
from .metrics import FontSet, embed_fonts
from .pages import PageAllocator, TemplateDocument
from .sections.appendix import compose_attendance_appendix, compose_evidence_appendix
from .sections.certificates import compose_certificates
from .sections.dtr import compose_daily_time_records
from .sections.evaluation import compose_evaluation_forms
from .sections.feedback import compose_feedback_forms
from .sections.host_org import compose_host_organizations
from .sections.personal import compose_personal_information
from .sections.summary import compose_practicum_summary

logger = logging.getLogger(__name__)

TemplateSource = Union[bytes, Path, TemplateDocument]


def _open_template(template: TemplateSource) -> TemplateDocument:
    if isinstance(template, TemplateDocument):
        return template
    if isinstance(template, (bytes, bytearray)):
        return TemplateDocument.from_bytes(bytes(template))
    return TemplateDocument.from_path(Path(template))


def _composers(bundle: JournalBundle) -> List[Tuple[str, Callable[[ComposeContext], object]]]:
    return [
        ("personal information", lambda ctx: compose_personal_information(ctx, bundle.personal_info, bundle.student.photo_url)),
        ("host organizations", lambda ctx: compose_host_organizations(ctx, bundle.host_orgs)),
        ("daily time records", lambda ctx: compose_daily_time_records(ctx, bundle.companies)),
        (
            "practicum summary",
            lambda ctx: compose_practicum_summary(
                ctx, bundle.companies, bundle.host_orgs, bundle.training_schedules, bundle.student_signature_url
            ),
        ),
        (
            "feedback forms",
            lambda ctx: compose_feedback_forms(ctx, bundle.feedback_forms, bundle.host_orgs, bundle.student_signature_url),
        ),
        ("evaluation forms", lambda ctx: compose_evaluation_forms(ctx, bundle.evaluation_forms)),
        ("certificates", lambda ctx: compose_certificates(ctx, bundle.certificates)),
        ("attendance appendix", lambda ctx: compose_attendance_appendix(ctx, bundle.companies)),
        ("evidence appendix", lambda ctx: compose_evidence_appendix(ctx, bundle.evidence)),
    ]


def compose_journal(
    template: TemplateSource,
    bundle: JournalBundle,
    fetcher: ImageFetcher | None = None,
    fonts: FontSet | None = None,
    style: dict | None = None,
    today: date | None = None,
    generated_at: datetime | None = None,
) -> bytes:
    """
    Compose the full journal onto the template and return the finished PDF bytes.

    Raises CompositionError (or a subclass) when no usable document can be
    produced. Missing images and incomplete records never fail the run.
    """
    doc = _open_template(template)
    allocator = PageAllocator(doc)
    ctx = ComposeContext(
        allocator=allocator,
        fonts=fonts or embed_fonts(),
        images=ImageEmbedder(fetcher),
        style=style if style is not None else load_style_preset(),
        student_name=bundle.personal_info.full_name or bundle.student.name,
        student_email=bundle.student.email or bundle.personal_info.email_address,
        today=today or date.today(),
        generated_at=generated_at or datetime.now(),
    )
    logger.info("Composing journal for %s (template has %d pages)", ctx.student_name or "unknown student", doc.page_count)

    for name, compose in _composers(bundle):
        try:
            compose(ctx)
        except CompositionError:
            raise
        except Exception as exc:
            raise CompositionError(f"Composing {name} failed: {exc}") from exc
        sealed = allocator.seal_open()
        logger.debug("Composed %s (%d page(s) sealed)", name, len(sealed))

    return allocator.serialize()
