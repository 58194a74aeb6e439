import logging
import os
import sys

from PySide6 import QtWidgets

from skogsnet.ui.main_window import MainWindow


def main():
    logging.basicConfig(
        level=os.getenv("SKOGSNET_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("Skogsnet")
    app.setOrganizationName("Skogsnet")

    win = MainWindow()
    win.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
