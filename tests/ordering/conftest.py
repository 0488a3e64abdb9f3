import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def gateway():
    """A fake gateway installed as the active one."""
    from payments.gateway import set_gateway
    from payments.gateway.fake_adapter import FakeGateway

    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture()
def add_product():
    """Add a product to the catalogue and return its id."""
    from ordering.product.management import AddProduct

    def _add(name="Organic Bananas", category="Fruits", price=120, offer_price=100, in_stock=True):
        return current_domain.process(
            AddProduct(
                name=name,
                category=category,
                price=price,
                offer_price=offer_price,
                in_stock=in_stock,
            ),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def address():
    return {
        "first_name": "Rahim",
        "last_name": "Uddin",
        "email": "rahim@example.com",
        "street": "12 Lake Road",
        "city": "Dhaka",
        "state": "Dhaka",
        "zipcode": "1207",
        "country": "Bangladesh",
        "phone": "+8801700000000",
    }
