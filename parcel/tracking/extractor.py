"""
Tracking Extractor.
Scrapes the tracking widget HTML for the delivery status block and the
update table.

The widget has no stable row markup, so the extractor works on the token
stream produced by lxml rather than on a tree: it only cares which text
token immediately follows a start tag.
"""

from typing import BinaryIO, NamedTuple, Optional
from lxml import etree
from loguru import logger

from parcel.exceptions import SourceFormatError
from parcel.models import TrackingResult, TrackingUpdate
from parcel.tracking.normalizer import DEFAULT_TIME, DateNormalizer


DELIVERY_CLASS = "b_focusTextSmall"
DELIVERED_LABEL = "Delivered"
CHUNK_SIZE = 16 * 1024


class RawUpdate(NamedTuple):
    """Text of one update row, before date normalization."""
    date: str
    time: str
    location: str
    status: str


class RowAssembler:
    """
    Groups consecutive table cell texts into update rows.

    Cells fill the slots date, time, location and status in order. A row
    is only returned once the status slot is filled; the slots then reset
    for the next row. A partially filled row is simply never returned.
    """

    SLOTS = RawUpdate._fields

    def __init__(self):
        self._filled: dict[str, str] = {}

    @property
    def next_slot(self) -> str:
        return self.SLOTS[len(self._filled)]

    @property
    def pending(self) -> int:
        """Number of cells collected for the current, incomplete row."""
        return len(self._filled)

    def push(self, text: str) -> Optional[RawUpdate]:
        self._filled[self.next_slot] = text
        if len(self._filled) < len(self.SLOTS):
            return None

        row = RawUpdate(**self._filled)
        self._filled = {}
        return row


class _WidgetTarget:
    """
    lxml parser target that collects tracking data from parse events.

    Text between two tags is coalesced into a single token before it is
    matched against the start tag that precedes it.
    """

    def __init__(self, normalizer: DateNormalizer):
        self.normalizer = normalizer
        self.rows = RowAssembler()

        self.delivered = False
        self.delivery_date_time = ""
        self.updates: list[TrackingUpdate] = []

        # "delivery" or "cell" while waiting for the token after a start tag
        self._awaiting: Optional[str] = None
        self._text: list[str] = []

    def start(self, tag, attrib):
        self._flush()
        if tag == "div" and attrib.get("class") == DELIVERY_CLASS:
            self._awaiting = "delivery"
        elif tag == "td":
            self._awaiting = "cell"

    def end(self, tag):
        self._flush()

    def data(self, data):
        self._text.append(data)

    def comment(self, text):
        self._flush()

    def close(self) -> TrackingResult:
        self._flush()
        if self.rows.pending:
            logger.debug(f"Dropping incomplete update row ({self.rows.pending} of 4 cells)")

        return TrackingResult(
            delivered=self.delivered,
            delivery_date_time=self.delivery_date_time,
            updates=self.updates,
        )

    def _flush(self):
        awaiting, self._awaiting = self._awaiting, None
        text = "".join(self._text)
        self._text = []

        # The token after the start tag was not text
        if awaiting is None or not text:
            return

        if awaiting == "delivery":
            self._on_delivery(text.strip())
        else:
            self._on_cell(text.strip())

    def _on_delivery(self, text: str):
        parts = text.split(": ")
        if len(parts) != 2:
            logger.debug(f"Skipping delivery block with unexpected text: {text!r}")
            return

        label, date_text = parts
        # A later block overwrites an earlier one
        self.delivered = label == DELIVERED_LABEL
        if self.delivered:
            self.delivery_date_time = self.normalizer.normalize_delivery_date(date_text)
        else:
            self.delivery_date_time = self.normalizer.normalize_estimated_delivery(date_text)

    def _on_cell(self, text: str):
        row = self.rows.push(text)
        if row is None:
            return

        self.updates.append(TrackingUpdate(
            date_time=self.normalizer.normalize_update_datetime(row.date, row.time or DEFAULT_TIME),
            location=row.location,
            status=row.status,
        ))


class TrackingExtractor:
    """
    Extracts a TrackingResult from the tracking widget HTML.

    The result carries the delivery flag, delivery date and updates only;
    the caller fills in tracking number and carrier.
    """

    def __init__(self, normalizer: DateNormalizer):
        self.normalizer = normalizer

    def parse(self, stream: BinaryIO) -> TrackingResult:
        """
        Parse one HTML document.

        Args:
            stream: Readable binary stream holding the document

        Returns:
            Partially populated TrackingResult

        Raises:
            SourceFormatError: If the stream cannot be read or tokenized
        """
        target = _WidgetTarget(self.normalizer)
        parser = etree.HTMLParser(target=target, encoding="utf-8")

        try:
            fed = False
            while True:
                chunk = stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                parser.feed(chunk)
                fed = True

            if not fed:
                return target.close()
            result = parser.close()

        except (OSError, etree.LxmlError) as e:
            raise SourceFormatError(f"Could not parse tracking response: {e}") from e

        logger.debug(f"Extracted {len(result.updates)} updates, delivered={result.delivered}")
        return result
