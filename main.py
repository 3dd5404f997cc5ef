"""DatalogPad – launcher."""

import logging
import sys
from pathlib import Path

from PyQt5.QtWidgets import QApplication
from DatalogPadWindow import DatalogPadWindow

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def run() -> None:
	app = QApplication(sys.argv)
	window = DatalogPadWindow()
	# Файл из командной строки открываем сразу
	if len(sys.argv) > 1:
		window.load_path(Path(sys.argv[1]))
	window.show()
	sys.exit(app.exec_())


if __name__ == "__main__":
	run()
