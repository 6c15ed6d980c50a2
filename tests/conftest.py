import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from tailstat._utils import DEFAULTS


@pytest.fixture(autouse=True)
def restore_defaults():
    """Keep `update_defaults` calls from leaking between tests."""
    saved = dict(DEFAULTS)
    yield
    DEFAULTS.clear()
    DEFAULTS.update(saved)
    plt.close("all")
