from __future__ import annotations

import logging
from typing import Sequence

from ...config import CERTIFICATE_PAGES, VERTICAL_MARGIN
from ...models import CertificateEntry
from ..context import ComposeContext
from ..images import fit_to_box
from ..text_layout import draw_centred

logger = logging.getLogger(__name__)

UNAVAILABLE = "Certificate image unavailable"


def compose_certificates(ctx: ComposeContext, certificates: Sequence[CertificateEntry]) -> int:
    """Place up to two certificates, one per page. Returns how many images were drawn."""
    records = list(certificates)
    if len(records) > len(CERTIFICATE_PAGES):
        logger.warning("%d certificates supplied; only %d are placed", len(records), len(CERTIFICATE_PAGES))

    drawn = 0
    for slot, page_index in enumerate(CERTIFICATE_PAGES):
        page = ctx.page(page_index)
        if slot >= len(records):
            continue
        cert = records[slot]
        canv = page.canvas
        pw, ph = page.width, page.height

        image = ctx.images.embed(cert.certificate_url)
        if image is None:
            draw_centred(canv, UNAVAILABLE, 0, pw, ph / 2, ctx.fonts.regular, 12)
            continue

        w, h = fit_to_box(image.width, image.height, pw - 80, ph - VERTICAL_MARGIN * 2)
        canv.drawImage(image.reader(), (pw - w) / 2, ph - VERTICAL_MARGIN - h, width=w, height=h, mask="auto")
        drawn += 1
        logger.debug("Certificate for %s on page %d", cert.company_name, page_index + 1)
    return drawn
