from datetime import datetime
from functools import partial

from PySide6.QtCore import Qt, QDate
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QListWidget,
    QLineEdit,
    QDialog,
    QFormLayout,
    QComboBox,
    QTextEdit,
    QDateEdit,
    QDialogButtonBox,
    QCheckBox,
)

from tasklist.models.task import PRIORITIES, SUGGESTED_LABELS, Task
from tasklist.services.details_editor import DetailsEditor


def parse_date_string(date_str):
    """Parse a stored due date (``yyyy-MM-dd``, optionally with a time part)."""
    if not date_str:
        return None
    try:
        return datetime.strptime(str(date_str)[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


class SubtaskRow(QWidget):
    """Checkbox + text + delete button for one subtask in the dialog."""

    def __init__(self, index: int, completed: bool, text: str, on_change, on_delete, parent=None):
        super().__init__(parent)
        self.index = index
        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)

        self.done_cb = QCheckBox()
        self.done_cb.setChecked(completed)
        self.done_cb.toggled.connect(lambda checked: on_change(self.index, "completed", checked))

        self.text_edit = QLineEdit(text)
        self.text_edit.setPlaceholderText("Subtask text")
        self.text_edit.textChanged.connect(lambda value: on_change(self.index, "text", value))

        self.delete_btn = QPushButton("Delete")
        self.delete_btn.setAutoDefault(False)
        self.delete_btn.clicked.connect(lambda: on_delete(self.index))

        row.addWidget(self.done_cb)
        row.addWidget(self.text_edit, 1)
        row.addWidget(self.delete_btn)


class TaskDetailsDialog(QDialog):
    """Details editor dialog.

    Every widget writes straight into the editor's buffer; the caller decides
    whether to ``save()`` or ``cancel()`` the editor from the exec() result.
    """

    def __init__(self, parent=None, editor: DetailsEditor = None):
        super().__init__(parent)
        self.setWindowTitle("Task Details")
        self.editor = editor
        self.subtask_rows = []
        self.build_ui()
        self.load_task(self.editor.buffer)

    def build_ui(self):
        self.form = QFormLayout(self)
        self.text_edit = QLineEdit()

        self.due_date = QDateEdit()
        self.due_date.setCalendarPopup(True)
        self.due_date.setDisplayFormat("yyyy-MM-dd")
        self.due_date.setDate(QDate.currentDate())
        self.no_due_cb = QCheckBox("No due date")

        self.priority_cb = QComboBox()
        self.priority_cb.addItems(list(PRIORITIES))

        # one list row per label, so labels may contain any character
        self.labels_list = QListWidget()
        self.label_input = QComboBox()
        self.label_input.setEditable(True)
        self.label_input.setInsertPolicy(QComboBox.NoInsert)
        self.label_input.addItems(list(SUGGESTED_LABELS))
        self.label_input.setCurrentText("")
        self.label_input.lineEdit().setPlaceholderText("Add label")
        self.add_label_btn = QPushButton("Add")
        self.remove_label_btn = QPushButton("Remove")

        self.details_edit = QTextEdit()
        self.details_edit.setPlaceholderText("Details / Description")

        # subtasks
        self.add_subtask_btn = QPushButton("+ Add Subtask")
        self.subtasks_box = QWidget()
        self.subtasks_layout = QVBoxLayout(self.subtasks_box)
        self.subtasks_layout.setContentsMargins(0, 0, 0, 0)
        self.no_subtasks_label = QLabel("No subtasks added yet.")

        # comments
        self.comments_list = QListWidget()
        self.comment_input = QLineEdit()
        self.comment_input.setPlaceholderText("Add comment")

        labels_row = QHBoxLayout()
        labels_row.addWidget(self.label_input, 1)
        labels_row.addWidget(self.add_label_btn)
        labels_row.addWidget(self.remove_label_btn)

        self.form.addRow("Task", self.text_edit)
        self.form.addRow("Due date", self.due_date)
        self.form.addRow("", self.no_due_cb)
        self.form.addRow("Priority", self.priority_cb)
        self.form.addRow("Labels", self.labels_list)
        self.form.addRow("", labels_row)
        self.form.addRow("Details", self.details_edit)
        self.form.addRow("Subtasks", self.add_subtask_btn)
        self.form.addRow("", self.no_subtasks_label)
        self.form.addRow("", self.subtasks_box)
        self.form.addRow("Comments", self.comments_list)
        self.form.addRow("", self.comment_input)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        # Enter in the comment field adds a comment, it must not press Save
        for btn in self.buttons.buttons() + [self.add_subtask_btn, self.add_label_btn, self.remove_label_btn]:
            btn.setAutoDefault(False)
            btn.setDefault(False)
        self.form.addRow(self.buttons)

    def load_task(self, task: Task):
        self.text_edit.setText(task.text)
        due = parse_date_string(task.due_date)
        if due:
            self.due_date.setDate(QDate(due.year, due.month, due.day))
            self.no_due_cb.setChecked(False)
            self.due_date.setEnabled(True)
        else:
            self.no_due_cb.setChecked(True)
            self.due_date.setEnabled(False)
        self.priority_cb.setCurrentText(task.priority)
        self._rebuild_labels()
        self.details_edit.setPlainText(task.details or "")
        self._rebuild_subtasks()
        self._rebuild_comments()

        # connect after loading so populating widgets does not count as an edit
        self.text_edit.textChanged.connect(partial(self.editor.edit, "text"))
        self.due_date.dateChanged.connect(self._on_due_changed)
        self.no_due_cb.toggled.connect(self._on_no_due_toggled)
        self.priority_cb.currentTextChanged.connect(partial(self.editor.edit, "priority"))
        self.add_label_btn.clicked.connect(self.on_add_label)
        self.label_input.lineEdit().returnPressed.connect(self.on_add_label)
        self.remove_label_btn.clicked.connect(self.on_remove_label)
        self.details_edit.textChanged.connect(
            lambda: self.editor.edit("details", self.details_edit.toPlainText())
        )
        self.add_subtask_btn.clicked.connect(self.on_add_subtask)
        self.comment_input.returnPressed.connect(self.on_add_comment)

    # -- due date --
    def _current_due(self):
        if self.no_due_cb.isChecked():
            return None
        return self.due_date.date().toString("yyyy-MM-dd")

    def _on_due_changed(self, _date):
        self.editor.edit("due_date", self._current_due())

    def _on_no_due_toggled(self, checked: bool):
        self.due_date.setEnabled(not checked)
        self.editor.edit("due_date", self._current_due())

    # -- labels --
    def _rebuild_labels(self):
        self.labels_list.clear()
        self.labels_list.addItems(self.editor.buffer.labels)

    def on_add_label(self):
        text = self.label_input.currentText().strip()
        if not text:
            return
        # duplicates are allowed
        self.editor.edit("labels", self.editor.buffer.labels + [text])
        self.label_input.setCurrentText("")
        self._rebuild_labels()

    def on_remove_label(self):
        row = self.labels_list.currentRow()
        if row < 0:
            return
        labels = list(self.editor.buffer.labels)
        del labels[row]
        self.editor.edit("labels", labels)
        self._rebuild_labels()

    # -- subtasks --
    def _rebuild_subtasks(self):
        for row in self.subtask_rows:
            self.subtasks_layout.removeWidget(row)
            row.deleteLater()
        self.subtask_rows = []
        for i, st in enumerate(self.editor.buffer.subtasks):
            row = SubtaskRow(i, st.completed, st.text, self.editor.update_subtask, self.on_delete_subtask)
            self.subtasks_layout.addWidget(row)
            self.subtask_rows.append(row)
        self.no_subtasks_label.setVisible(not self.subtask_rows)

    def on_add_subtask(self):
        self.editor.add_subtask()
        self._rebuild_subtasks()

    def on_delete_subtask(self, index: int):
        self.editor.delete_subtask(index)
        self._rebuild_subtasks()

    # -- comments --
    def _rebuild_comments(self):
        self.comments_list.clear()
        self.comments_list.addItems(self.editor.buffer.comments)

    def on_add_comment(self):
        if self.editor.add_comment(self.comment_input.text()):
            self.comment_input.clear()
            self._rebuild_comments()
