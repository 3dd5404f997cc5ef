import os
import sys
from typing import Iterator

# Qt-тесты работают без дисплея
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt5.QtWidgets import QApplication


@pytest.fixture(scope="session", autouse=True)
def qapp() -> Iterator[QApplication]:
    """Один QApplication на всю сессию: виджеты живут только пока он существует."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app
