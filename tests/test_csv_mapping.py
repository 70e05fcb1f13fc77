from __future__ import annotations

from csv_processor.core.processor.csv_helper import (
    FieldDefinition,
    apply_mapping,
    auto_match,
    map_field,
    missing_required_fields,
    normalize_fields,
)

FIELDS = {
    "email": {"required": True, "label": "E-mail"},
    "first_name": "First name",
    "phone": None,
}


def test_normalize_fields_accepts_several_shapes():
    fields = normalize_fields(FIELDS)

    assert list(fields) == ["email", "first_name", "phone"]
    assert fields["email"] == FieldDefinition("email", required=True, label="E-mail")
    assert fields["first_name"].display_label == "First name"
    assert fields["phone"].display_label == "phone"

    as_list = normalize_fields([FieldDefinition("id", required=True)])
    assert as_list == {"id": FieldDefinition("id", required=True)}
    assert normalize_fields(None) == {}


def test_exact_match_on_name_or_label_ignores_case():
    mapping = auto_match(["EMAIL", "first name", "Notes"], FIELDS)

    assert mapping == {"email": "EMAIL", "first_name": "first name", "phone": ""}


def test_case_sensitive_matching():
    mapping = auto_match(["EMAIL", "E-mail"], FIELDS, ignore_case=False)

    assert mapping["email"] == "E-mail"


def test_first_matching_header_wins():
    mapping = auto_match(["e-mail", "email"], {"email": "E-mail"})

    assert mapping == {"email": "e-mail"}


def test_auto_match_is_idempotent():
    headers = ["Email", "Phone number", "First Name"]

    first = auto_match(headers, FIELDS, containment=True)
    second = auto_match(headers, FIELDS, first, containment=True)

    assert first == second


def test_existing_choices_are_not_overwritten():
    existing = {"email": "Contact", "phone": ""}

    mapping = auto_match(["Contact", "email", "phone"], FIELDS, existing)

    assert mapping["email"] == "Contact"
    assert mapping["phone"] == "phone"
    assert existing == {"email": "Contact", "phone": ""}


def test_containment_pass_only_runs_when_enabled():
    headers = ["Customer e-mail address", "Mobile phone"]

    assert auto_match(headers, FIELDS)["phone"] == ""

    mapping = auto_match(headers, FIELDS, containment=True)
    assert mapping["email"] == "Customer e-mail address"
    assert mapping["phone"] == "Mobile phone"


def test_containment_skips_empty_headers():
    mapping = auto_match(["", "Phone"], {"phone": None}, containment=True, ignore_case=False)

    assert mapping == {"phone": "Phone"}


def test_map_field_returns_new_mapping():
    mapping = {"email": "Email", "phone": ""}

    updated = map_field(mapping, "phone", "Mobile")
    cleared = map_field(updated, "email", None)

    assert updated == {"email": "Email", "phone": "Mobile"}
    assert cleared == {"email": "", "phone": "Mobile"}
    assert mapping == {"email": "Email", "phone": ""}


def test_missing_required_fields():
    missing = missing_required_fields(FIELDS, {"first_name": "Name"})

    assert [definition.name for definition in missing] == ["email"]
    assert missing_required_fields(FIELDS, {"email": "Mail"}) == []


def test_apply_mapping_fills_unmapped_fields():
    rows = [{"Mail": "a@example.com", "Name": "Ada"}, {"Mail": "b@example.com"}]
    mapping = {"email": "Mail", "first_name": "Name", "phone": ""}

    processed = apply_mapping(rows, FIELDS, mapping)

    assert processed == [
        {"email": "a@example.com", "first_name": "Ada", "phone": ""},
        {"email": "b@example.com", "first_name": "", "phone": ""},
    ]
