"""Unit tests for Customer DTOs."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.customers.dtos import CreateCustomerDTO

pytestmark = pytest.mark.unit


class TestCreateCustomerDTO:
    def test_normalises_email(self):
        dto = CreateCustomerDTO(name=" Ada ", email="Ada@Example.COM")
        assert dto.email == "ada@example.com"
        assert dto.name == "Ada"

    def test_rejects_invalid_email(self):
        with pytest.raises(ValidationError):
            CreateCustomerDTO(name="Ada", email="not-an-email")

    def test_rejects_blank_name(self):
        with pytest.raises(ValidationError, match="Name must not be empty"):
            CreateCustomerDTO(name="   ", email="ada@example.com")
