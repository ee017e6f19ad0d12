import pytest

from genores.annotate.file_io import load_snapshot
from genores.cache import CACHE
from genores.engine import AnnotationEngine
from genores.store import SnapshotStore

from ..util import SNAPSHOT_FILE


@pytest.fixture(autouse=True)
def reset_cache():
    CACHE.reset()
    yield
    CACHE.reset()


@pytest.fixture(scope='session')
def snapshot():
    return load_snapshot(SNAPSHOT_FILE)


@pytest.fixture
def store(snapshot):
    return SnapshotStore(snapshot)


@pytest.fixture
def engine(store):
    return AnnotationEngine(store)


@pytest.fixture
def resolver(engine):
    return engine.resolver


@pytest.fixture
def mapper(engine):
    return engine.mapper


@pytest.fixture
def navigator(engine):
    return engine.navigator
