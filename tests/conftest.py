import pytest

from hookloop import ManualHost, Runtime


@pytest.fixture
def host():
    return ManualHost()


@pytest.fixture
def rt(host):
    return Runtime(host, name="demo")
