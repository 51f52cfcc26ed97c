"""Tests for the trip, budget, itinerary and document services."""
import json

import pytest

from cozy_cloud.models import ActivityCreate, ExpenseCreate, TripCreate, TripStatus
from cozy_cloud.services.budget import BudgetService, summarize
from cozy_cloud.services.documents import (
    DocumentService, SUCCESS_MESSAGES, TOO_BIG_MESSAGE, WRONG_TYPE_MESSAGE, validate_upload,
)
from cozy_cloud.services.errors import BackendError, NotFoundError, ValidationFailed
from cozy_cloud.services.itinerary import ItineraryService
from cozy_cloud.services.trips import TripService
from cozy_cloud.models.trip import Expense


def _trip(fake, trip_id="trip-1", **extra):
    row = dict(id=trip_id, user_id="user-1", title="Spring", destination="Kyoto",
               start_date="2025-04-01", end_date="2025-04-03", budget_limit=1000,
               status="planning")
    row.update(extra)
    return fake.seed("itineraries", **row)


class TestTripService:
    """Trip hub operations."""

    @pytest.mark.asyncio
    async def test_create_sets_owner_and_status(self, fake, backend):
        service = TripService(backend)
        trip = await service.create(TripCreate(
            title="Spring", destination="Kyoto",
            start_date="2025-04-01", end_date="2025-04-03", budget_limit=500,
        ))
        assert trip.destination == "Kyoto"
        assert trip.status == TripStatus.PLANNING

        stored = fake.tables["itineraries"][0]
        assert stored["user_id"] == "user-1"
        assert stored["status"] == "planning"
        assert stored["start_date"] == "2025-04-01"
        # The write is followed by a reload of the list
        assert [t.id for t in service.trips.items] == [trip.id]

    @pytest.mark.asyncio
    async def test_create_requires_sign_in(self, fake, anonymous_backend):
        with pytest.raises(ValidationFailed):
            await TripService(anonymous_backend).create(TripCreate(
                destination="Kyoto", start_date="2025-04-01", end_date="2025-04-03",
            ))
        assert fake.calls("POST", "/rest/v1") == []

    @pytest.mark.asyncio
    async def test_list_sorted_by_start_date(self, fake, backend):
        _trip(fake, "late", start_date="2025-09-01", end_date="2025-09-02")
        _trip(fake, "early", start_date="2025-02-01", end_date="2025-02-02")
        trips = await TripService(backend).list()
        assert [t.id for t in trips] == ["early", "late"]

    @pytest.mark.asyncio
    async def test_get_missing_trip(self, backend):
        with pytest.raises(NotFoundError, match="Trip not found!"):
            await TripService(backend).get("nope")

    @pytest.mark.asyncio
    async def test_status_and_delete(self, fake, backend):
        _trip(fake)
        service = TripService(backend)
        trip = await service.set_status("trip-1", "completed")
        assert trip.status == TripStatus.COMPLETED

        await service.delete("trip-1")
        assert fake.tables["itineraries"] == []
        assert service.trips.items == []


class TestItineraryService:
    """Activities of a trip."""

    @pytest.mark.asyncio
    async def test_add_needs_time(self, fake, backend):
        _trip(fake)
        service = ItineraryService(backend, "trip-1")
        with pytest.raises(ValidationFailed, match="Please select a time!"):
            await service.add(ActivityCreate(activity_name="Museum"))
        assert fake.calls("POST") == []

    @pytest.mark.asyncio
    async def test_add_groups_by_day(self, fake, backend):
        _trip(fake)
        service = ItineraryService(backend, "trip-1")
        await service.add(ActivityCreate(day_number=2, activity_name="Lunch", start_time="12:00"))
        await service.add(ActivityCreate(day_number=1, activity_name="Temple", start_time="09:00"))
        await service.add(ActivityCreate(day_number=2, activity_name="Tea", start_time="08:30"))

        grouped = await service.by_day()
        assert {day: [a.activity_name for a in acts] for day, acts in grouped.items()} == {
            1: ["Temple"], 2: ["Tea", "Lunch"],
        }
        assert await service.destination() == "Kyoto"


class TestBudget:
    """Budget thresholds and expenses."""

    def _expenses(self, *amounts):
        return [
            Expense(id=f"e{i}", itinerary_id="t", description="x", amount=a)
            for i, a in enumerate(amounts)
        ]

    @pytest.mark.parametrize("spent,level", [
        (0, "safe"), (49.99, "safe"), (50, "caution"), (84.9, "caution"),
        (85, "danger"), (99.9, "danger"), (100, "over"), (140, "over"),
    ])
    def test_levels(self, spent, level):
        expenses = self._expenses(spent) if spent else []
        assert summarize(100, expenses).level == level

    def test_no_limit_means_no_percent(self):
        summary = summarize(0, self._expenses(30))
        assert summary.percent_used == 0
        assert summary.level == "safe"
        assert summary.message == "You are doing great! 🌸"
        assert summary.remaining == -30

    def test_over_budget_message(self):
        summary = summarize(200, self._expenses(150, 60))
        assert summary.total_spent == 210
        assert summary.message == "Oh no! Budget exceeded 🛑"

    def test_totals_by_category(self):
        expenses = [
            Expense(id="1", itinerary_id="t", description="Sushi", amount=20, category="Food"),
            Expense(id="2", itinerary_id="t", description="Ramen", amount=12, category="Food"),
            Expense(id="3", itinerary_id="t", description="Train", amount=30, category="Transport"),
        ]
        assert summarize(100, expenses).by_category == {"Food": 32, "Transport": 30}

    @pytest.mark.asyncio
    async def test_add_expense_and_summary(self, fake, backend):
        _trip(fake, budget_limit=100)
        service = BudgetService(backend, "trip-1")
        await service.add(ExpenseCreate(description="Hotel", amount=90, category="Stay"))

        body = json.loads(fake.calls("POST", "/rest/v1/itinerary_expenses")[0].content)[0]
        assert "expense_date" not in body
        assert body["itinerary_id"] == "trip-1"

        summary = await service.summary()
        assert summary.level == "danger"
        assert summary.message == "Careful, funds are getting low 🍂"

    @pytest.mark.asyncio
    async def test_set_limit(self, fake, backend):
        _trip(fake, budget_limit=None)
        service = BudgetService(backend, "trip-1")
        assert await service.budget_limit() == 0
        await service.set_limit(250)
        assert await service.budget_limit() == 250
        with pytest.raises(ValidationFailed):
            await service.set_limit(-1)


class TestDocuments:
    """Upload validation and document lifecycle."""

    def test_validate_upload(self):
        validate_upload("application/pdf", 1024)
        with pytest.raises(ValidationFailed, match="too big"):
            validate_upload("application/pdf", 60 * 1024 * 1024)
        with pytest.raises(ValidationFailed, match="Only PDF"):
            validate_upload("text/plain", 10)

    @pytest.mark.asyncio
    async def test_oversized_upload_never_reaches_backend(self, fake, backend):
        service = DocumentService(backend, "trip-1")
        with pytest.raises(ValidationFailed) as info:
            await service.upload("scan.pdf", "application/pdf", b"%PDF", size=60 * 1024 * 1024)
        assert info.value.message == TOO_BIG_MESSAGE
        assert fake.requests == []

    @pytest.mark.asyncio
    async def test_wrong_type_never_reaches_backend(self, fake, backend):
        service = DocumentService(backend, "trip-1")
        with pytest.raises(ValidationFailed) as info:
            await service.upload("notes.txt", "text/plain", b"hello")
        assert info.value.message == WRONG_TYPE_MESSAGE
        assert fake.requests == []

    @pytest.mark.asyncio
    async def test_upload_stores_object_and_row(self, fake, backend):
        service = DocumentService(backend, "trip-1", clock=lambda: 1700000000.123)
        doc, message = await service.upload("ticket.pdf", "application/pdf", b"%PDF-1.7")

        assert message in SUCCESS_MESSAGES
        assert doc.file_path == "user-1/trip-1/1700000000123.pdf"
        assert doc.file_size == 8
        assert doc.is_pdf and not doc.is_image
        assert fake.objects[("trip-docs", "user-1/trip-1/1700000000123.pdf")] == b"%PDF-1.7"
        assert [d.id for d in service.documents.items] == [doc.id]

    @pytest.mark.asyncio
    async def test_rename_download_preview_delete(self, fake, backend):
        service = DocumentService(backend, "trip-1", clock=lambda: 1.0)
        doc, _ = await service.upload("photo.png", "image/png", b"\x89PNG")

        assert await service.rename(doc.id, "  Passport  ") == "Renamed successfully! 📝"
        assert (await service.find(doc.id)).file_name == "Passport"

        found, data = await service.download(doc.id)
        assert data == b"\x89PNG"
        assert found.is_image

        url = await service.preview_url(doc.id)
        assert "/storage/v1/object/sign/trip-docs/" in url
        assert json.loads(fake.calls("POST", "/storage/v1/object/sign")[0].content) == {"expiresIn": 60}

        await service.delete(doc.id)
        assert fake.objects == {}
        assert fake.tables["trip_documents"] == []

    @pytest.mark.asyncio
    async def test_rename_needs_a_name(self, backend):
        with pytest.raises(ValidationFailed):
            await DocumentService(backend, "trip-1").rename("d1", "   ")

    @pytest.mark.asyncio
    async def test_unknown_document(self, backend):
        with pytest.raises(NotFoundError, match="Document not found!"):
            await DocumentService(backend, "trip-1").preview_url("nope")

    @pytest.mark.asyncio
    async def test_backend_error_passed_through(self, fake, backend):
        fake.fail("POST", "trip_documents", "permission denied for table trip_documents", status=403)
        service = DocumentService(backend, "trip-1")
        with pytest.raises(BackendError) as info:
            await service.upload("ticket.pdf", "application/pdf", b"%PDF")
        assert info.value.message == "permission denied for table trip_documents"


class TestGapsAndFailures:
    """Undated trips, foreign documents and interrupted order saves."""

    @pytest.mark.asyncio
    async def test_list_tolerates_undated_trip(self, fake, backend):
        _trip(fake, "dated")
        _trip(fake, "undated", start_date=None, end_date=None)
        trips = await TripService(backend).list()
        assert [t.id for t in trips] == ["dated", "undated"]
        assert trips[1].start_date is None

    @pytest.mark.asyncio
    async def test_rename_other_trips_document(self, fake, backend):
        fake.seed("trip_documents", id="d1", itinerary_id="trip-2", file_path="u/trip-2/1.pdf",
                  file_name="visa.pdf", file_type="application/pdf", file_size=10)
        with pytest.raises(NotFoundError, match="Document not found!"):
            await DocumentService(backend, "trip-1").rename("d1", "mine now")
        assert fake.calls("PATCH") == []
        assert fake.tables["trip_documents"][0]["file_name"] == "visa.pdf"

    @pytest.mark.asyncio
    async def test_failed_order_save_reloads(self, fake, backend):
        _trip(fake)
        for name, start in [("A", "09:00"), ("B", "11:00"), ("C", "13:00")]:
            fake.seed("itinerary_activities", itinerary_id="trip-1", day_number=2,
                      activity_name=name, start_time=start)
        fake.fail("PATCH", "itinerary_activities", "could not serialize access", status=409)
        service = ItineraryService(backend, "trip-1", persist_order=True)

        with pytest.raises(BackendError, match="could not serialize access"):
            await service.reorder(2, 2, 0)

        assert [a.activity_name for a in service.activities.items] == ["A", "B", "C"]
