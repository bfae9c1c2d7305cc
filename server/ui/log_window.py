#!/usr/bin/env python3
"""
Server log window - PyQt6 viewer for the chat transcript

Shows every line published by the server Transcript in a read-only text
area. The asyncio server runs in a ServerThread so the Qt event loop stays
on the main thread; transcript lines cross threads through a Qt signal.
"""

import asyncio
import threading
from typing import Optional

from PyQt6.QtWidgets import QMainWindow, QPlainTextEdit
from PyQt6.QtCore import QThread, pyqtSignal
from PyQt6.QtGui import QFont

from server.activity.activity_log import Transcript
from server.main_server import ChatRelayServer
from server.utils.logger import logger


WINDOW_TITLE = "Chat Server - Log"


class ServerLogWindow(QMainWindow):
    """Read-only window listing transcript lines as they are logged."""

    line_logged = pyqtSignal(str)

    def __init__(self, transcript: Transcript):
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.text_area = QPlainTextEdit()
        self.text_area.setReadOnly(True)
        self.text_area.setFont(QFont("Monospace", 10))
        self.setCentralWidget(self.text_area)
        self.resize(520, 400)

        self.server_thread: Optional["ServerThread"] = None

        # Emitted from the server thread, delivered on the GUI thread
        self.line_logged.connect(self.append_line)
        for line in transcript.lines():
            self.append_line(line)
        transcript.add_listener(self.line_logged.emit)

    def append_line(self, line: str):
        """Append one line and keep the view scrolled to the end."""
        self.text_area.appendPlainText(line)

    def attach_server_thread(self, thread: "ServerThread"):
        """Stop thread when the window is closed."""
        self.server_thread = thread

    def closeEvent(self, event):
        if self.server_thread is not None:
            self.server_thread.stop()
            self.server_thread.wait(5000)
        super().closeEvent(event)


class ServerThread(QThread):
    """Thread running the asyncio chat server."""

    failed = pyqtSignal(str)

    def __init__(self, server: ChatRelayServer):
        super().__init__()
        self.server = server
        self.loop: Optional[asyncio.AbstractEventLoop] = None
        self.task: Optional[asyncio.Task] = None
        self.loop_ready = threading.Event()

    def run(self):
        """Run server loop."""
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)
        try:
            self.task = self.loop.create_task(self.server.start())
            self.loop_ready.set()
            self.loop.run_until_complete(self.task)
        except asyncio.CancelledError:
            logger.info("Server loop stopped")
        except Exception as e:
            logger.log_error("server thread", e)
            self.failed.emit(str(e))
        finally:
            # Cancel whatever is still pending so the loop can close
            pending = asyncio.all_tasks(self.loop)
            for task in pending:
                task.cancel()
            if pending:
                self.loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            self.loop.close()

    def stop(self):
        """Cancel the server task from the GUI thread."""
        if not self.loop_ready.wait(timeout=5.0):
            return
        if self.loop is not None and not self.loop.is_closed():
            self.loop.call_soon_threadsafe(self.task.cancel)
