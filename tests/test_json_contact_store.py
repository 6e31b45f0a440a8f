"""Tests for JsonContactStore — loading the Contact Store export."""

from datetime import date

import pytest

from touchbase.adapters.json_contact_store import JsonContactStore
from touchbase.ports.contact_store_port import ContactStoreError


def _contact(**overrides):
    row = {
        "id": "p1",
        "first_name": "Sarah",
        "last_name": "Chen",
        "relationship_class": "friend",
        "cadence_tier": "close_friend",
        "date_added": "2024-01-10",
        "preferred_contact_method": "facetime",
    }
    row.update(overrides)
    return row


class TestListContacts:
    @pytest.mark.asyncio
    async def test_loads_contact(self, export_path):
        path = export_path({"contacts": [_contact(birthday="1990-07-01", origin_note="College")]})
        [sarah] = await JsonContactStore(path).list_contacts()
        assert sarah.id == "p1"
        assert sarah.cadence_tier == "close_friend"
        assert sarah.birthday == date(1990, 7, 1)
        assert sarah.date_added == date(2024, 1, 10)
        assert sarah.origin_note == "College"
        assert sarah.days_overdue is None

    @pytest.mark.asyncio
    async def test_backend_column_aliases(self, export_path):
        row = {
            "id": "p3",
            "first_name": "Priya",
            "last_name": "Patel",
            "type": "network",
            "cadence_tier": "active",
            "where_from": "Former manager",
            "nudge_interaction_type": "email",
            "date_added": "2024-03-15",
        }
        [priya] = await JsonContactStore(export_path({"contacts": [row]})).list_contacts()
        assert priya.relationship_class == "network"
        assert priya.origin_note == "Former manager"
        assert priya.preferred_contact_method == "email"

    @pytest.mark.asyncio
    async def test_invalid_tier_normalized(self, export_path, caplog):
        path = export_path({"contacts": [_contact(cadence_tier="active")]})
        with caplog.at_level("WARNING"):
            [sarah] = await JsonContactStore(path).list_contacts()
        assert sarah.cadence_tier == "keep_warm"
        assert "not valid for friend" in caplog.text

    @pytest.mark.asyncio
    async def test_unparseable_birthday_treated_as_absent(self, export_path, caplog):
        path = export_path({"contacts": [_contact(birthday="July 1st")]})
        with caplog.at_level("WARNING"):
            [sarah] = await JsonContactStore(path).list_contacts()
        assert sarah.birthday is None
        assert "unparseable birthday" in caplog.text

    @pytest.mark.asyncio
    async def test_timestamp_last_interaction_date(self, export_path):
        path = export_path({"contacts": [_contact(last_interaction_date="2024-05-01T18:30:00Z")]})
        [sarah] = await JsonContactStore(path).list_contacts()
        assert sarah.last_interaction_date == date(2024, 5, 1)

    @pytest.mark.asyncio
    async def test_unknown_method_defaults_to_call(self, export_path):
        path = export_path({"contacts": [_contact(preferred_contact_method="pigeon")]})
        [sarah] = await JsonContactStore(path).list_contacts()
        assert sarah.preferred_contact_method == "call"

    @pytest.mark.asyncio
    async def test_broken_records_skipped(self, export_path, caplog):
        rows = [
            _contact(),
            _contact(id="p2", relationship_class="family"),
            {"id": "p3", "first_name": "NoClass", "date_added": "2024-01-01"},
            _contact(id="p4", date_added="not a date"),
        ]
        with caplog.at_level("WARNING"):
            contacts = await JsonContactStore(export_path({"contacts": rows})).list_contacts()
        assert [c.id for c in contacts] == ["p1"]
        assert "Skipping contact p2" in caplog.text
        assert "Skipping contacts[2]" in caplog.text

    @pytest.mark.asyncio
    async def test_missing_section_is_empty(self, export_path):
        assert await JsonContactStore(export_path({})).list_contacts() == []


class TestListInteractions:
    @pytest.mark.asyncio
    async def test_loads_and_filters(self, export_path):
        path = export_path({
            "interactions": [
                {"id": "i1", "contact_id": "p1", "date_of_interaction": "2024-06-01",
                 "date_logged": "2024-06-02", "interaction_type": "text", "notes": "hi"},
                {"id": "i2", "person_id": "p2", "date_of_interaction": "2024-06-03", "type": "email"},
            ]
        })
        store = JsonContactStore(path)

        everything = await store.list_interactions()
        assert [i.id for i in everything] == ["i1", "i2"]
        assert everything[1].contact_id == "p2"
        assert everything[1].interaction_type == "email"
        assert everything[1].date_logged == date(2024, 6, 3)

        only_p1 = await store.list_interactions(contact_id="p1")
        assert [i.id for i in only_p1] == ["i1"]
        assert only_p1[0].date_logged == date(2024, 6, 2)

    @pytest.mark.asyncio
    async def test_interaction_without_date_skipped(self, export_path):
        path = export_path({"interactions": [{"id": "i1", "contact_id": "p1"}]})
        assert await JsonContactStore(path).list_interactions() == []


class TestStoreErrors:
    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        store = JsonContactStore(str(tmp_path / "nope.json"))
        with pytest.raises(ContactStoreError, match="not found"):
            await store.list_contacts()

    @pytest.mark.asyncio
    async def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ContactStoreError, match="Failed to read"):
            await JsonContactStore(str(path)).list_contacts()

    @pytest.mark.asyncio
    async def test_top_level_must_be_object(self, export_path):
        with pytest.raises(ContactStoreError, match="top level"):
            await JsonContactStore(export_path([1, 2])).list_interactions()

    @pytest.mark.asyncio
    async def test_section_must_be_list(self, export_path):
        with pytest.raises(ContactStoreError, match="Expected a list"):
            await JsonContactStore(export_path({"contacts": {"id": "p1"}})).list_contacts()

    def test_defaults_to_configured_path(self):
        from touchbase.config import settings

        assert str(JsonContactStore()._path) == settings.DATA_PATH
