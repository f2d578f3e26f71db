import pytest

def pytest_addoption(parser):
    parser.addoption("--quick", action="store_true",
                     default=False, help="skip the randomized round trip tests")
    parser.addoption("--slow", action="store_true",
                     default=False, help="only run the randomized round trip tests")


def pytest_collection_modifyitems(config, items):
    # Tests requesting the `slow` fixture are the long randomized runs
    if not config.getoption("--slow"):
        return
    only_slow = pytest.mark.skip(reason="--slow given, skipping quick tests")
    for item in items:
        if 'slow' not in getattr(item, 'fixturenames', ()):
            item.add_marker(only_slow)
