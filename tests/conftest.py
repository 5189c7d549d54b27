import pytest

from modules.inventory.catalog import Catalog, parse_vocabulary
from modules.inventory.session import FormSession
from modules.inventory.storage import FormStorage
from tests.fakes import FakeInventoryClient, FakeScheduler


@pytest.fixture
def catalog():
    return Catalog(
        products=parse_vocabulary("productA:Product A,productB:Product B,productC:Product C", []),
        rooms=parse_vocabulary("roomX:Room X,roomY:Room Y,yaupon:Yaupon", []),
        reporters=parse_vocabulary("ana:Ana,ben:Ben", []),
    )


@pytest.fixture
def storage(tmp_path):
    return FormStorage(data_dir=tmp_path / "data", key="inventoryFormData")


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def client():
    return FakeInventoryClient()


@pytest.fixture
def session(storage, client, scheduler, catalog):
    s = FormSession(storage=storage, client=client, scheduler=scheduler, catalog=catalog, autosave_delay=1.0)
    s.start()
    return s
