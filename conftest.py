import logging

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "gui: mark test as needing a real sound server to run on"
    )
