import logging
import sqlite3

from PySide6.QtCore import Qt, Signal, QDate, QLocale
from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QListWidget,
    QListWidgetItem,
    QLineEdit,
    QDialog,
    QAbstractItemView,
    QButtonGroup,
    QStatusBar,
    QCheckBox,
)
from PySide6.QtGui import QFont, QColor, QPixmap, QPainter, QIcon

from tasklist.models.task import Task
from tasklist.services.details_editor import DetailsEditor
from tasklist.services.filters import FilterMode, filter_tasks
from tasklist.services.task_store import TaskStore
from tasklist.ui.details_dialog import TaskDetailsDialog, parse_date_string

logger = logging.getLogger(__name__)

PRIORITY_COLORS = {
    "high": "#e53935",  # red
    "medium": "#fb8c00",  # orange
    "low": "#43a047",  # green
}
EMPTY_TEXT = "No tasks here!"

LIGHT_STYLE = """
QMainWindow, QDialog {
background: #f5f5f5;
color: #222222;
}

QListWidget {
background: #ffffff;
border-radius: 12px;
border: 1px solid rgba(15, 23, 34, 0.06);
padding: 8px;
}

QListWidget::item {
margin: 4px 0;
border-radius: 8px;
background: #f9f9f9;
}

QListWidget::item:selected {
background: #e6f0ff;
color: #0f1722;
}

QPushButton {
border: 1px solid #e6eef8;
padding: 6px 10px;
border-radius: 10px;
background: #ffffff;
}

QPushButton:checked {
background: #e6f0ff;
}

QPushButton#addBtn {
background: qlineargradient(spread:pad, x1:0, y1:0, x2:1, y2:0, stop:0 #2563eb, stop:1 #3b82f6);
color: white;
border: none;
}

QLineEdit,
QComboBox,
QDateEdit,
QTextEdit {
background: #ffffff;
border: 1px solid #e6eef8;
border-radius: 8px;
padding: 6px;
}
"""

DARK_STYLE = """
QMainWindow, QDialog, QWidget {
background: #121212;
color: #eeeeee;
}

QListWidget {
background: #1e1e1e;
border-radius: 12px;
border: 1px solid #333333;
padding: 8px;
}

QListWidget::item {
margin: 4px 0;
border-radius: 8px;
background: #272727;
}

QListWidget::item:selected {
background: #2f3b52;
}

QPushButton {
border: 1px solid #444444;
padding: 6px 10px;
border-radius: 10px;
background: #272727;
color: #eeeeee;
}

QPushButton:checked {
background: #2f3b52;
}

QPushButton#addBtn {
background: #2563eb;
color: white;
border: none;
}

QLineEdit,
QComboBox,
QDateEdit,
QTextEdit {
background: #1e1e1e;
color: #ffffff;
border: 1px solid #444444;
border-radius: 8px;
padding: 6px;
}
"""


def _priority_icon(priority: str) -> QIcon:
    # small filled circle in the priority colour
    color = QColor(PRIORITY_COLORS.get((priority or "").lower(), "#cccccc"))
    size = 14
    pix = QPixmap(size, size)
    pix.fill(Qt.transparent)
    p = QPainter(pix)
    p.setRenderHint(QPainter.Antialiasing)
    p.setBrush(color)
    p.setPen(Qt.NoPen)
    p.drawEllipse(0, 0, size - 1, size - 1)
    p.end()
    return QIcon(pix)


def task_caption(task: Task) -> str:
    """Row caption: title, label chips and the due date in the local format."""
    parts = [task.text]
    parts.extend(f"[{label}]" for label in task.labels)
    due = parse_date_string(task.due_date)
    if due:
        qd = QDate(due.year, due.month, due.day)
        parts.append(f"(Due: {QLocale().toString(qd, QLocale.FormatType.ShortFormat)})")
    return " ".join(parts)


class TaskRow(QWidget):
    """Widget shown for one task: checkbox, caption, Details and Delete."""

    def __init__(self, task: Task, on_toggle, on_details, on_delete, parent=None):
        super().__init__(parent)
        self.task_id = task.id
        row = QHBoxLayout(self)
        row.setContentsMargins(6, 2, 6, 2)

        handle = QLabel("☰")
        handle.setToolTip("Drag to reorder")

        marker = QLabel()
        marker.setPixmap(_priority_icon(task.priority).pixmap(14, 14))
        marker.setToolTip(f"Priority: {task.priority}")

        self.done_cb = QCheckBox()
        self.done_cb.setChecked(task.completed)
        self.done_cb.toggled.connect(lambda _checked: on_toggle(self.task_id))

        self.caption = QLabel(task_caption(task))
        self.caption.setWordWrap(True)
        fnt = self.caption.font()
        fnt.setStrikeOut(task.completed)
        self.caption.setFont(fnt)
        if task.completed:
            self.caption.setStyleSheet("color: gray;")

        self.details_btn = QPushButton("Details")
        self.details_btn.clicked.connect(lambda: on_details(self.task_id))
        self.delete_btn = QPushButton("Delete")
        self.delete_btn.clicked.connect(lambda: on_delete(self.task_id))

        row.addWidget(handle)
        row.addWidget(marker)
        row.addWidget(self.done_cb)
        row.addWidget(self.caption, 1)
        row.addWidget(self.details_btn)
        row.addWidget(self.delete_btn)


class TaskListWidget(QListWidget):
    """Task list with internal drag & drop.

    After a drop the new visual order is compared with the old one and
    ``task_moved(task_id, from_row, to_row)`` is emitted with visible row
    positions; ``to_row`` is -1 when the drop did not move anything.
    """

    task_moved = Signal(str, int, int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.setDragEnabled(True)
        self.setAcceptDrops(True)
        self.setDropIndicatorShown(True)
        self.setDragDropMode(QAbstractItemView.InternalMove)
        self.setDefaultDropAction(Qt.MoveAction)

    def visible_ids(self):
        ids = []
        for i in range(self.count()):
            tid = self.item(i).data(Qt.UserRole)
            if tid:
                ids.append(tid)
        return ids

    def dropEvent(self, event):
        before = self.visible_ids()
        current = self.currentItem()
        moved_id = current.data(Qt.UserRole) if current else None
        super().dropEvent(event)
        self.report_move(moved_id, before)

    def report_move(self, moved_id, before):
        """Compare ``before`` with the current rows and emit ``task_moved``."""
        after = self.visible_ids()
        if not moved_id or moved_id not in before or moved_id not in after:
            return
        from_row = before.index(moved_id)
        to_row = after.index(moved_id)
        self.task_moved.emit(moved_id, from_row, to_row if to_row != from_row else -1)


class MainWindow(QMainWindow):
    def __init__(self, store: TaskStore, title: str = "Task List", dark_mode: bool = False,
                 filter_mode: FilterMode = FilterMode.ALL):
        super().__init__()
        self.setWindowTitle(title)
        self.setFont(QFont("Segoe UI", 10))

        self.store = store
        self.editor = DetailsEditor(store)
        self.filter_mode = filter_mode
        self.dark_mode = dark_mode
        self.visible_tasks = []

        self._setup_ui(title)
        self.apply_theme()
        self.store.add_listener(self.refresh)
        self.refresh()

    def _setup_ui(self, title: str):
        central = QWidget()
        v = QVBoxLayout(central)

        heading = QLabel(title)
        heading.setFont(QFont("Segoe UI Semibold", 16))
        heading.setAlignment(Qt.AlignCenter)
        v.addWidget(heading)

        # filter selector + dark mode
        toolbar = QHBoxLayout()
        self.filter_group = QButtonGroup(self)
        self.filter_group.setExclusive(True)
        self.filter_buttons = {}
        for mode, label in (
            (FilterMode.ALL, "All"),
            (FilterMode.ACTIVE, "Active"),
            (FilterMode.COMPLETED, "Completed"),
        ):
            btn = QPushButton(label)
            btn.setCheckable(True)
            btn.setChecked(mode == self.filter_mode)
            btn.clicked.connect(lambda _checked=False, m=mode: self.set_filter(m))
            self.filter_group.addButton(btn)
            self.filter_buttons[mode] = btn
            toolbar.addWidget(btn)
        toolbar.addStretch()
        self.dark_mode_cb = QCheckBox("Dark Mode")
        self.dark_mode_cb.setChecked(self.dark_mode)
        self.dark_mode_cb.toggled.connect(self.on_dark_mode_toggled)
        toolbar.addWidget(self.dark_mode_cb)
        v.addLayout(toolbar)

        # add task
        add_row = QHBoxLayout()
        self.input = QLineEdit()
        self.input.setPlaceholderText("Add a new task")
        self.input.returnPressed.connect(self.on_add_task)
        add_btn = QPushButton("Add")
        add_btn.setObjectName("addBtn")
        add_btn.clicked.connect(self.on_add_task)
        add_row.addWidget(self.input, 1)
        add_row.addWidget(add_btn)
        v.addLayout(add_row)

        self.list_widget = TaskListWidget()
        # queued: the list is rebuilt only after the drop event has finished
        self.list_widget.task_moved.connect(self.on_task_moved, Qt.QueuedConnection)
        v.addWidget(self.list_widget)

        self.setCentralWidget(central)
        self.status = QStatusBar(self)
        self.setStatusBar(self.status)

    # -- rendering --
    def refresh(self):
        self.visible_tasks = filter_tasks(self.store.tasks, self.filter_mode)
        self.list_widget.clear()
        if not self.visible_tasks:
            item = QListWidgetItem(EMPTY_TEXT)
            item.setFlags(Qt.NoItemFlags)
            item.setTextAlignment(Qt.AlignCenter)
            fnt = item.font()
            fnt.setItalic(True)
            item.setFont(fnt)
            self.list_widget.addItem(item)
        for task in self.visible_tasks:
            item = QListWidgetItem()
            item.setData(Qt.UserRole, task.id)
            item.setFlags(Qt.ItemIsEnabled | Qt.ItemIsSelectable | Qt.ItemIsDragEnabled)
            row = TaskRow(task, self.on_toggle, self.on_open_details, self.on_delete)
            item.setSizeHint(row.sizeHint())
            self.list_widget.addItem(item)
            self.list_widget.setItemWidget(item, row)
        self.update_status_bar()

    def update_status_bar(self):
        tasks = self.store.tasks
        done = sum(1 for t in tasks if t.completed)
        self.status.showMessage(
            f"Total: {len(tasks)}  —  Active: {len(tasks) - done}  Completed: {done}"
        )

    def apply_theme(self):
        self.setStyleSheet(DARK_STYLE if self.dark_mode else LIGHT_STYLE)

    # -- handlers --
    def _mutate(self, action, *args):
        """Run a store mutation; storage failures end up in the status bar."""
        try:
            return action(*args)
        except sqlite3.Error:
            logger.exception("Could not save tasks")
            # the in-memory change stands, so the list must still show it
            self.refresh()
            self.status.showMessage("Could not save tasks, see the log for details.")
            return False

    def on_add_task(self):
        text = self.input.text()
        if not text.strip():
            return
        self._mutate(self.store.add, text)
        self.input.clear()

    def on_toggle(self, task_id: str):
        self._mutate(self.store.toggle_completed, task_id)

    def on_delete(self, task_id: str):
        self._mutate(self.store.remove, task_id)

    def on_task_moved(self, task_id: str, from_row: int, to_row: int):
        # rows are positions in the filtered view; translate to store positions
        changed = False
        if to_row >= 0 and to_row < len(self.visible_tasks):
            target_id = self.visible_tasks[to_row].id
            changed = self._mutate(
                self.store.reorder, self.store.index_of(task_id), self.store.index_of(target_id)
            )
        if not changed:
            self.refresh()

    def on_open_details(self, task_id: str):
        task = self.store.get(task_id)
        if task is None:
            return
        self.editor.open(task)
        dlg = TaskDetailsDialog(self, editor=self.editor)
        if dlg.exec() == QDialog.Accepted:
            self._mutate(self.editor.save)
        else:
            self.editor.cancel()

    def set_filter(self, mode: FilterMode):
        self.filter_mode = mode
        self.filter_buttons[mode].setChecked(True)
        self.refresh()

    def on_dark_mode_toggled(self, checked: bool):
        self.dark_mode = checked
        self.apply_theme()
