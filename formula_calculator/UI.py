# UI.py
""""PySide6 user interface for the Formula Calculator.

Structure
---------
- Formula window: formula input, one input per free variable, result line
- Settings UI: modal dialog for user preferences

Responsibilities (Formula window)
---------------------------------
- Ask MathEngine which variables the formula needs and build an input for each
- Re-evaluate on every keystroke (formula or variable value)
- Render the result string; optionally show the internal error as tooltip
- Clipboard integration: click on the result copies it

Responsibilities (Settings)
---------------------------
- Load Current Settings and Settings Descriptions via config_manager
- Save and apply theme changes immediately
"""""

import logging
import sys

import pyperclip
from PySide6 import QtWidgets
from PySide6.QtCore import Qt, Signal

from . import error as E
from . import config_manager as config_manager
from . import MathEngine as MathEngine

logger = logging.getLogger(__name__)

DARK_STYLESHEET = """
    QWidget {background-color: #121212; color: white;}
    QLineEdit {background-color: #444444; color: white; border: 1px solid #666666;}
    QPushButton {background-color: #2e2e2e; color: white; border: 1px solid #444444; padding: 5px 15px;}
    QPushButton:hover {background-color: #444444;}
"""


class ResultLabel(QtWidgets.QLabel):
    """Result line that reports clicks, used for "click to copy"."""

    clicked = Signal()

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
        super().mousePressEvent(event)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Every setting in config.json is a boolean and is shown as a
    checkbox labelled with its description from ui_strings.json.

    """""

    settings_saved = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        self.setWindowTitle("Formula Calculator Settings")
        self.setMinimumSize(300, 160)
        main_layout = QtWidgets.QVBoxLayout(self)

        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        for key_value, value in self.setting_value_list.items():
            if not isinstance(value, bool):
                continue
            description = self.setting_description_list.get(key_value, key_value)
            checkbox = QtWidgets.QCheckBox(description)
            checkbox.setChecked(value)
            main_layout.addWidget(checkbox)
            self.widgets[key_value] = checkbox

        button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok | QtWidgets.QDialogButtonBox.StandardButton.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self):
        for key_value, checkbox in self.widgets.items():
            self.setting_value_list[key_value] = checkbox.isChecked()

        saved_settings = config_manager.save_setting(self.setting_value_list)
        if saved_settings != {}:
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           f"Error 5000: {E.ERROR_MESSAGES['5000']}config.json")

    def update_darkmode(self):
        self.setStyleSheet(DARK_STYLESHEET if self.setting_value_list["darkmode"] else "")


class FormulaWindow(QtWidgets.QWidget):

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State ---
        self.variables = []  # names currently asked for, in formula order
        self.values = {}  # name -> raw text typed by the user
        self.variable_inputs = {}  # name -> QLineEdit
        self.result = MathEngine.PROMPT_MESSAGE

        # --- 3. Window Setup ---
        self.setWindowTitle("Formula Calculator")
        self.resize(420, 260)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        # --- 4. Formula input + buttons ---
        formula_row = QtWidgets.QHBoxLayout()
        self.formula_input = QtWidgets.QLineEdit()
        self.formula_input.setPlaceholderText("Enter your formula, e.g., sqrt(16), sin(90)")
        self.formula_input.textChanged.connect(self.handle_formula_changed)
        formula_row.addWidget(self.formula_input, 1)

        clear_button = QtWidgets.QPushButton("Clear")
        clear_button.clicked.connect(self.handle_clear)
        formula_row.addWidget(clear_button)

        settings_button = QtWidgets.QPushButton("Settings")
        settings_button.clicked.connect(self.open_settings)
        formula_row.addWidget(settings_button)
        main_v_layout.addLayout(formula_row)

        # --- 5. Variable inputs (rebuilt whenever the variable list changes) ---
        self.variable_form = QtWidgets.QFormLayout()
        main_v_layout.addLayout(self.variable_form)

        # --- 6. Result line ---
        self.result_label = ResultLabel()
        font = self.result_label.font()
        font.setPointSize(14)
        font.setBold(True)
        self.result_label.setFont(font)
        self.result_label.clicked.connect(self.copy_result)
        main_v_layout.addWidget(self.result_label)
        main_v_layout.addStretch(1)

        self.show_result()
        self.update_darkmode()

    # --- Formula / variable handling ---
    def handle_formula_changed(self, text):
        variables = MathEngine.free_variables(text)
        if variables != self.variables:
            self.rebuild_variable_inputs(variables)
        self.calculate_result()

    def rebuild_variable_inputs(self, variables):
        while self.variable_form.rowCount() > 0:
            self.variable_form.removeRow(0)
        self.variable_inputs = {}

        # Values typed for names that are still present survive the rebuild
        self.values = {name: self.values[name] for name in variables if name in self.values}
        self.variables = variables

        for name in variables:
            line_edit = QtWidgets.QLineEdit(self.values.get(name, ""))
            line_edit.textChanged.connect(lambda text, var=name: self.handle_value_changed(var, text))
            self.variable_form.addRow(f"{name}:", line_edit)
            self.variable_inputs[name] = line_edit

    def handle_value_changed(self, name, text):
        self.values[name] = text
        self.calculate_result()

    def calculate_result(self):
        formula = self.formula_input.text()
        self.result = MathEngine.evaluate_expression(formula, self.values)

        tooltip = ""
        if self.result == MathEngine.INVALID_MESSAGE and self.setting_value_list["show_error_details"]:
            try:
                MathEngine.calculate(formula, self.values)
            except E.MathError as error_obj:
                tooltip = f"Error {error_obj.code}: {error_obj.message}"
        self.result_label.setToolTip(tooltip)
        self.show_result()

    def show_result(self):
        self.result_label.setText(f"Result: {self.result}")

    def handle_clear(self):
        self.values = {}
        self.formula_input.clear()
        self.rebuild_variable_inputs([])
        self.calculate_result()

    def copy_result(self):
        if not self.setting_value_list["copy_on_click"]:
            return
        if self.result in (MathEngine.PROMPT_MESSAGE, MathEngine.INVALID_MESSAGE):
            return
        try:
            pyperclip.copy(self.result)
        except pyperclip.PyperclipException as e:
            logger.warning("%s %s", E.ERROR_MESSAGES["4000"], e)

    # --- Settings / theme ---
    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()

        # Reload so darkmode and the other switches apply right away
        self.setting_value_list = config_manager.load_setting_value("all")
        self.update_darkmode()
        self.calculate_result()

    def update_darkmode(self):
        self.setStyleSheet(DARK_STYLESHEET if self.setting_value_list["darkmode"] else "")


def main():
    app = QtWidgets.QApplication(sys.argv)
    window = FormulaWindow()
    window.show()
    sys.exit(app.exec())
