"""Unit tests for field groups."""

import pytest

from core.exceptions import ValidationError
from domain.entities.profile import ProfileFields
from domain.services.field_groups import (
    CODES_GROUP,
    IMAGES_GROUP,
    MAX_FIELDS_PER_GROUP,
    PERSONAL_GROUP,
    POKEMON_GROUP,
    PROFILE_GROUPS,
    FieldGroup,
    FieldSpec,
)


class TestGroupLayout:
    def test_groups_are_disjoint_and_cover_every_profile_field(self):
        names = [name for group in PROFILE_GROUPS for name in group.names]

        assert len(names) == len(set(names))
        assert set(names) == set(ProfileFields.names())

    def test_groups_fit_in_one_modal(self):
        assert all(len(group.fields) <= MAX_FIELDS_PER_GROUP for group in PROFILE_GROUPS)

    def test_rejects_oversized_group(self):
        with pytest.raises(ValueError):
            FieldGroup(
                key="too_big",
                title="Too Big",
                button_label="Edit",
                fields=tuple(FieldSpec(f"f{i}", f"F{i}") for i in range(MAX_FIELDS_PER_GROUP + 1)),
            )


class TestValidate:
    def test_strips_values_and_blanks_become_none(self):
        cleaned = POKEMON_GROUP.validate(
            {"trainer_class": "  Ace Trainer ", "nature": "", "partner_pokemon": "   "}
        )

        assert cleaned == {
            "trainer_class": "Ace Trainer",
            "nature": None,
            "partner_pokemon": None,
            "starting_region": None,
        }

    def test_ignores_fields_outside_the_group(self):
        cleaned = PERSONAL_GROUP.validate({"likes": "Berries", "trainer_class": "Ace"})

        assert "trainer_class" not in cleaned
        assert cleaned["likes"] == "Berries"

    def test_canonicalizes_codes(self):
        cleaned = CODES_GROUP.validate(
            {
                "pokemon_go_code": "1234-5678-9012",
                "pokemon_pocket_code": "",
                "switch_code": "1234 5678 9012",
            }
        )

        assert cleaned == {
            "pokemon_go_code": "1234 5678 9012",
            "pokemon_pocket_code": None,
            "switch_code": "SW-1234-5678-9012",
        }

    def test_collects_every_invalid_code(self):
        with pytest.raises(ValidationError) as exc_info:
            CODES_GROUP.validate(
                {
                    "pokemon_go_code": "1234 5678 901",
                    "pokemon_pocket_code": "nope",
                    "switch_code": "SX-1234-5678-9012",
                }
            )

        assert exc_info.value.errors == [
            "`1234 5678 901` is not a valid Pokémon Go friend code.",
            "`nope` is not a valid Pokémon TCG Pocket friend code.",
            "`SX-1234-5678-9012` is not a valid switch friend code.",
        ]

    def test_accepts_http_urls(self):
        cleaned = IMAGES_GROUP.validate({"thumbnail_url": "https://example.com/a.png", "image_url": None})

        assert cleaned == {"thumbnail_url": "https://example.com/a.png", "image_url": None}

    def test_rejects_non_http_urls(self):
        with pytest.raises(ValidationError) as exc_info:
            IMAGES_GROUP.validate({"thumbnail_url": "not a url", "image_url": "ftp://example.com/a.png"})

        assert len(exc_info.value.errors) == 2
