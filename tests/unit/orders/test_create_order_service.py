"""Unit tests for CreateOrderService with mocked repositories.

Covers:
- Customer, product existence and stock validation, in that order.
- First offending ID (request order) named in error messages.
- Price snapshot and absolute stock overwrite on success.
- No writes when any validation fails.
- Collaborator failures propagate unwrapped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest

from modules.core.exceptions import AppError
from modules.orders.dtos import CreateOrderDTO, CreateOrderProductDTO
from modules.orders.exceptions import (
    CustomerNotFound,
    InsufficientStock,
    NoProductsFound,
    ProductNotFound,
)
from modules.orders.services import CreateOrderService
from modules.products.dtos import ProductQuantityDTO

pytestmark = pytest.mark.unit


@dataclass
class StubCustomer:
    id: UUID


@dataclass
class StubProduct:
    id: UUID
    price: Decimal
    quantity: int


@dataclass
class StubOrderProduct:
    product_id: UUID
    quantity: int
    price: Decimal


class StubItems:
    def __init__(self, items: List[StubOrderProduct]) -> None:
        self._items = items

    def all(self) -> List[StubOrderProduct]:
        return list(self._items)


@dataclass
class StubOrder:
    customer: StubCustomer
    order_products: StubItems
    id: UUID = field(default_factory=uuid4)


def _echo_create(data: Dict[str, Any]) -> StubOrder:
    items = [
        StubOrderProduct(
            product_id=item["product_id"],
            quantity=item["quantity"],
            price=item["price"],
        )
        for item in data["products"]
    ]
    return StubOrder(customer=data["customer"], order_products=StubItems(items))


def _request(customer_id: UUID, *lines: tuple[UUID, int]) -> CreateOrderDTO:
    return CreateOrderDTO(
        customer_id=customer_id,
        products=[
            CreateOrderProductDTO(product_id=product_id, quantity=quantity)
            for product_id, quantity in lines
        ],
    )


@pytest.fixture()
def customer():
    return StubCustomer(id=uuid4())


@pytest.fixture()
def p1():
    return StubProduct(id=uuid4(), price=Decimal("10.00"), quantity=5)


@pytest.fixture()
def p2():
    return StubProduct(id=uuid4(), price=Decimal("25.50"), quantity=2)


@pytest.fixture()
def repos(customer, p1, p2):
    order_repo = MagicMock()
    product_repo = MagicMock()
    customer_repo = MagicMock()

    customer_repo.get_by_id.return_value = customer
    product_repo.find_all_by_id.return_value = [p1, p2]
    order_repo.create.side_effect = _echo_create
    return order_repo, product_repo, customer_repo


@pytest.fixture()
def service(repos):
    order_repo, product_repo, customer_repo = repos
    return CreateOrderService(
        order_repository=order_repo,
        product_repository=product_repo,
        customer_repository=customer_repo,
    )


def _assert_nothing_written(repos) -> None:
    order_repo, product_repo, _ = repos
    order_repo.create.assert_not_called()
    product_repo.update_quantity.assert_not_called()


# ===========================================================================
# Happy path
# ===========================================================================


class TestCreateOrderSuccess:
    def test_single_line_scenario(self, service, repos, customer, p1):
        order_repo, product_repo, _ = repos
        product_repo.find_all_by_id.return_value = [p1]

        order = service.execute(_request(customer.id, (p1.id, 3)))

        items = order.order_products.all()
        assert len(items) == 1
        assert items[0].product_id == p1.id
        assert items[0].quantity == 3
        assert items[0].price == Decimal("10.00")
        product_repo.update_quantity.assert_called_once_with(
            [ProductQuantityDTO(id=p1.id, quantity=2)]
        )

    def test_returns_order_from_repository(self, service, repos, customer, p1):
        order_repo, _, _ = repos
        stored = _echo_create(
            {
                "customer": customer,
                "products": [
                    {"product_id": p1.id, "quantity": 1, "price": p1.price}
                ],
            }
        )
        order_repo.create.side_effect = None
        order_repo.create.return_value = stored

        order = service.execute(_request(customer.id, (p1.id, 1)))

        assert order is stored

    def test_creates_order_with_resolved_customer(self, service, repos, customer, p1):
        order_repo, _, customer_repo = repos

        service.execute(_request(customer.id, (p1.id, 1)))

        customer_repo.get_by_id.assert_called_once_with(str(customer.id))
        data = order_repo.create.call_args.args[0]
        assert data["customer"] is customer

    def test_line_items_keep_request_order_and_stored_prices(
        self, service, repos, customer, p1, p2
    ):
        order_repo, _, _ = repos

        service.execute(_request(customer.id, (p2.id, 1), (p1.id, 4)))

        data = order_repo.create.call_args.args[0]
        assert data["products"] == [
            {"product_id": p2.id, "quantity": 1, "price": Decimal("25.50")},
            {"product_id": p1.id, "quantity": 4, "price": Decimal("10.00")},
        ]

    def test_fetches_each_requested_id_once(self, service, repos, customer, p1, p2):
        _, product_repo, _ = repos

        service.execute(_request(customer.id, (p1.id, 1), (p2.id, 1), (p1.id, 1)))

        product_repo.find_all_by_id.assert_called_once_with([p1.id, p2.id])

    def test_stock_update_is_one_batch_of_absolute_values(
        self, service, repos, customer, p1, p2
    ):
        _, product_repo, _ = repos

        service.execute(_request(customer.id, (p1.id, 5), (p2.id, 1)))

        product_repo.update_quantity.assert_called_once_with(
            [
                ProductQuantityDTO(id=p1.id, quantity=0),
                ProductQuantityDTO(id=p2.id, quantity=1),
            ]
        )

    def test_stock_computed_from_stored_line_items(
        self, service, repos, customer, p1
    ):
        order_repo, product_repo, _ = repos
        order_repo.create.side_effect = None
        order_repo.create.return_value = StubOrder(
            customer=customer,
            order_products=StubItems(
                [StubOrderProduct(product_id=p1.id, quantity=2, price=p1.price)]
            ),
        )

        service.execute(_request(customer.id, (p1.id, 3)))

        product_repo.update_quantity.assert_called_once_with(
            [ProductQuantityDTO(id=p1.id, quantity=3)]
        )

    def test_quantity_equal_to_stock_is_accepted(self, service, repos, customer, p2):
        _, product_repo, _ = repos

        service.execute(_request(customer.id, (p2.id, 2)))

        product_repo.update_quantity.assert_called_once_with(
            [ProductQuantityDTO(id=p2.id, quantity=0)]
        )

    def test_duplicate_lines_are_not_merged(self, service, repos, customer, p1):
        order_repo, product_repo, _ = repos

        service.execute(_request(customer.id, (p1.id, 3), (p1.id, 3)))

        data = order_repo.create.call_args.args[0]
        assert len(data["products"]) == 2
        # Each line is written from the same stock snapshot.
        product_repo.update_quantity.assert_called_once_with(
            [
                ProductQuantityDTO(id=p1.id, quantity=2),
                ProductQuantityDTO(id=p1.id, quantity=2),
            ]
        )

    def test_first_record_wins_for_repeated_product_ids(
        self, service, repos, customer, p1
    ):
        order_repo, product_repo, _ = repos
        shadow = StubProduct(id=p1.id, price=Decimal("99.00"), quantity=100)
        product_repo.find_all_by_id.return_value = [p1, shadow]

        service.execute(_request(customer.id, (p1.id, 1)))

        data = order_repo.create.call_args.args[0]
        assert data["products"][0]["price"] == Decimal("10.00")
        product_repo.update_quantity.assert_called_once_with(
            [ProductQuantityDTO(id=p1.id, quantity=4)]
        )


# ===========================================================================
# Validation failures
# ===========================================================================


class TestCustomerValidation:
    def test_unknown_customer_raises(self, service, repos, p1):
        _, product_repo, customer_repo = repos
        customer_repo.get_by_id.return_value = None

        with pytest.raises(CustomerNotFound) as exc_info:
            service.execute(_request(uuid4(), (p1.id, 1)))

        assert exc_info.value.message == "Customer not found."
        product_repo.find_all_by_id.assert_not_called()
        _assert_nothing_written(repos)


class TestProductValidation:
    def test_no_products_found_raises(self, service, repos, customer):
        _, product_repo, _ = repos
        product_repo.find_all_by_id.return_value = []

        with pytest.raises(NoProductsFound):
            service.execute(_request(customer.id, (uuid4(), 1), (uuid4(), 2)))

        _assert_nothing_written(repos)

    def test_empty_request_falls_through_to_no_products_found(
        self, service, repos, customer
    ):
        _, product_repo, _ = repos
        product_repo.find_all_by_id.return_value = []

        with pytest.raises(NoProductsFound):
            service.execute(_request(customer.id))

        product_repo.find_all_by_id.assert_called_once_with([])
        _assert_nothing_written(repos)

    def test_unknown_product_mixed_with_known_raises(
        self, service, repos, customer, p1
    ):
        _, product_repo, _ = repos
        product_repo.find_all_by_id.return_value = [p1]
        missing = uuid4()

        with pytest.raises(ProductNotFound) as exc_info:
            service.execute(_request(customer.id, (p1.id, 1), (missing, 1)))

        assert exc_info.value.product_id == missing
        assert str(missing) in exc_info.value.message
        _assert_nothing_written(repos)

    def test_names_first_missing_id_in_request_order(
        self, service, repos, customer, p1
    ):
        _, product_repo, _ = repos
        product_repo.find_all_by_id.return_value = [p1]
        first_missing, second_missing = uuid4(), uuid4()

        with pytest.raises(ProductNotFound) as exc_info:
            service.execute(
                _request(
                    customer.id, (p1.id, 1), (first_missing, 1), (second_missing, 1)
                )
            )

        assert exc_info.value.product_id == first_missing
        assert str(second_missing) not in exc_info.value.message

    def test_existence_checked_before_stock(self, service, repos, customer, p1):
        _, product_repo, _ = repos
        product_repo.find_all_by_id.return_value = [p1]
        missing = uuid4()

        with pytest.raises(ProductNotFound):
            service.execute(_request(customer.id, (p1.id, 50), (missing, 1)))


class TestStockValidation:
    def test_quantity_above_stock_raises(self, service, repos, customer, p1):
        _, product_repo, _ = repos
        product_repo.find_all_by_id.return_value = [p1]

        with pytest.raises(InsufficientStock) as exc_info:
            service.execute(_request(customer.id, (p1.id, 6)))

        assert exc_info.value.product_id == p1.id
        assert str(p1.id) in exc_info.value.message
        _assert_nothing_written(repos)

    def test_names_first_offending_line_in_request_order(
        self, service, repos, customer, p1, p2
    ):
        with pytest.raises(InsufficientStock) as exc_info:
            service.execute(_request(customer.id, (p2.id, 3), (p1.id, 6)))

        assert exc_info.value.product_id == p2.id
        _assert_nothing_written(repos)


class TestErrorTaxonomy:
    @pytest.mark.parametrize(
        "error, status_code",
        [
            (CustomerNotFound(), 404),
            (NoProductsFound(), 404),
            (ProductNotFound(uuid4()), 404),
            (InsufficientStock(uuid4()), 409),
        ],
    )
    def test_domain_errors_are_app_errors(self, error, status_code):
        assert isinstance(error, AppError)
        assert error.status_code == status_code

    def test_error_code_is_snake_case_class_name(self):
        assert InsufficientStock(uuid4()).code == "insufficient_stock"


class TestCollaboratorFailures:
    def test_repository_errors_propagate_unwrapped(self, service, repos, customer, p1):
        order_repo, product_repo, _ = repos
        order_repo.create.side_effect = ConnectionError("database unavailable")

        with pytest.raises(ConnectionError):
            service.execute(_request(customer.id, (p1.id, 1)))

        product_repo.update_quantity.assert_not_called()

    def test_stock_update_failure_leaves_order_created(
        self, service, repos, customer, p1
    ):
        order_repo, product_repo, _ = repos
        product_repo.update_quantity.side_effect = ConnectionError("lost connection")

        with pytest.raises(ConnectionError):
            service.execute(_request(customer.id, (p1.id, 1)))

        order_repo.create.assert_called_once()
