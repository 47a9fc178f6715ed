"""
Test configuration for the seal codec test suite.
"""

import os

import pytest

from seal_codec.config import CONFIG_ENV_VAR, ENV_PREFIX, CodecSettings, configure, reset_settings


# Test markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "mrz: mark test as MRZ related")
    config.addinivalue_line("markers", "seal: mark test as digital seal related")
    config.addinivalue_line("markers", "adapter: mark test as document adapter related")


# Collection settings
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        # Add unit marker to unit tests
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Add specific markers based on test names
        name = item.name.lower()
        if "mrz" in name or name.startswith(("test_td", "test_mrv")):
            item.add_marker(pytest.mark.mrz)
        if "seal" in name:
            item.add_marker(pytest.mark.seal)
        if "adapter" in str(item.fspath):
            item.add_marker(pytest.mark.adapter)


# Test environment setup
@pytest.fixture(autouse=True)
def codec_settings(monkeypatch):
    """Give every test the default settings, independent of the caller's environment."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
    settings = configure(CodecSettings())

    yield settings

    reset_settings()


@pytest.fixture
def year_policy():
    """Pin the two-digit year policies used when parsing MRZ and seal dates."""
    return configure(mrz_cutoff_year=60, birth_year_pivot=32)


@pytest.fixture
def specimen_td3_mrz():
    """ICAO 9303 Part 4 specimen passport MRZ."""
    return "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<\nL898902C36UTO7408122F1204159ZE184226B<<<<<10"


@pytest.fixture
def specimen_td1_mrz():
    """ICAO 9303 Part 5 specimen ID card MRZ."""
    return "I<UTOD231458907<<<<<<<<<<<<<<<\n7408122F1204159UTO<<<<<<<<<<<6\nERIKSSON<<ANNA<MARIA<<<<<<<<<<"
