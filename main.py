import sys
import os
import json
from datetime import datetime
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QLabel, QPushButton, QComboBox, QLineEdit,
    QVBoxLayout, QWidget, QTextEdit, QFileDialog, QHBoxLayout, QGridLayout,
    QSpinBox, QRadioButton, QButtonGroup
)
from PySide6.QtCore import Qt

from constants import Config, ErrorMessages, MONTHS, QUARTERS, ReturnType, UIConstants
from error_handler import InputDataError, handle_export_errors, log_operation
from export import generate_summary_csv
from import_logic import load_report_rows, validate_settlement_excel
from logic import generate_gstr1_json

CONFIG_FILE = Config.CONFIG_FILE


class DashboardApp(QMainWindow):
    """Meesho forward/reverse reports -> GSTR-1 B2CS JSON."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("📄 Meesho GSTR-1 B2CS JSON Generator")
        self.setGeometry(100, 100, 900, 700)

        # month -> {"forward": path, "reverse": path}
        self.selected_files = {}
        self.file_labels = {}

        self.config = self.load_config()
        self.output_folder = self.config.get("output_folder", os.getcwd())

        self.init_ui()
        self.apply_config()
        self.connect_signals()
        self.rebuild_file_section()

    def init_ui(self):
        central = QWidget()
        layout = QVBoxLayout(central)

        # Return type
        type_layout = QHBoxLayout()
        type_layout.addWidget(QLabel("Return Type:"))
        self.radio_monthly = QRadioButton("Monthly Return")
        self.radio_quarterly = QRadioButton("Quarterly Return")
        self.return_type_group = QButtonGroup(self)
        self.return_type_group.addButton(self.radio_monthly)
        self.return_type_group.addButton(self.radio_quarterly)
        self.radio_monthly.setChecked(True)
        type_layout.addWidget(self.radio_monthly)
        type_layout.addWidget(self.radio_quarterly)
        type_layout.addStretch()
        layout.addLayout(type_layout)

        # Year, month/quarter, GSTIN
        form = QGridLayout()
        form.addWidget(QLabel("Year:"), 0, 0)
        self.year_spin = QSpinBox()
        self.year_spin.setRange(Config.YEAR_MIN, Config.YEAR_MAX)
        self.year_spin.setValue(datetime.now().year)
        form.addWidget(self.year_spin, 0, 1)

        self.period_label = QLabel("Month:")
        form.addWidget(self.period_label, 1, 0)
        self.period_combo = QComboBox()
        form.addWidget(self.period_combo, 1, 1)

        form.addWidget(QLabel("GST Number:"), 2, 0)
        self.gstin_input = QLineEdit()
        self.gstin_input.setMaxLength(15)
        self.gstin_input.setPlaceholderText("Enter your 15-digit GST number")
        form.addWidget(self.gstin_input, 2, 1)
        layout.addLayout(form)

        # Forward/reverse file pickers, rebuilt per return type
        self.file_section = QWidget()
        self.file_layout = QGridLayout(self.file_section)
        layout.addWidget(self.file_section)

        # Output folder
        folder_layout = QHBoxLayout()
        self.folder_label = QLabel()
        self.btn_output_folder = QPushButton("📁 Output Folder")
        folder_layout.addWidget(self.folder_label)
        folder_layout.addStretch()
        folder_layout.addWidget(self.btn_output_folder)
        layout.addLayout(folder_layout)

        # Actions
        action_layout = QHBoxLayout()
        self.btn_generate_json = QPushButton("⬇️ Generate GSTR-1 JSON")
        self.btn_summary_csv = QPushButton("📊 Export Summary CSV")
        action_layout.addWidget(self.btn_generate_json)
        action_layout.addWidget(self.btn_summary_csv)
        layout.addLayout(action_layout)

        self.output_text = QTextEdit()
        self.output_text.setReadOnly(True)
        layout.addWidget(self.output_text)

        self.setCentralWidget(central)

    def connect_signals(self):
        self.radio_monthly.toggled.connect(self.on_return_type_changed)
        self.period_combo.currentTextChanged.connect(self.on_period_changed)
        self.btn_output_folder.clicked.connect(self.change_output_folder)
        self.btn_generate_json.clicked.connect(self.generate_json)
        self.btn_summary_csv.clicked.connect(self.export_summary_csv)

    # --- Config load/save ---
    def load_config(self):
        """Load remembered selections from JSON file."""
        if os.path.exists(CONFIG_FILE):
            try:
                with open(CONFIG_FILE, "r") as f:
                    return json.load(f)
            except (json.JSONDecodeError, IOError):
                return {}
        return {}

    def save_config(self):
        self.config = {
            "return_type": self.return_type(),
            "year": self.year_spin.value(),
            "gstin": self.gstin_input.text().strip(),
            "output_folder": self.output_folder,
        }
        try:
            with open(CONFIG_FILE, "w") as f:
                json.dump(self.config, f, indent=2)
        except IOError as e:
            self.log(f"{UIConstants.ICON_WARNING} Could not save config: {e}")

    def apply_config(self):
        if self.config.get("return_type") == ReturnType.QUARTERLY:
            self.radio_quarterly.setChecked(True)
        if self.config.get("year"):
            self.year_spin.setValue(int(self.config["year"]))
        self.gstin_input.setText(self.config.get("gstin", ""))
        self.folder_label.setText(f"Output Folder: {self.output_folder}")
        self.fill_period_combo()

    # --- Helper UI methods ---
    def log(self, message):
        """Append message to output text area."""
        self.output_text.append(message)
        self.output_text.ensureCursorVisible()

    def return_type(self):
        return ReturnType.MONTHLY if self.radio_monthly.isChecked() else ReturnType.QUARTERLY

    def _label_text(self, kind, path):
        return f"{kind}: {os.path.basename(path) if path else 'XLSX, XLS up to 10MB'}"

    def fill_period_combo(self):
        self.period_combo.blockSignals(True)
        self.period_combo.clear()
        if self.return_type() == ReturnType.MONTHLY:
            self.period_label.setText("Month:")
            self.period_combo.addItems(MONTHS)
        else:
            self.period_label.setText("Quarter:")
            for quarter, months in QUARTERS.items():
                self.period_combo.addItem(f"{quarter} ({', '.join(months)})", quarter)
        self.period_combo.blockSignals(False)

    def selected_period(self):
        if self.return_type() == ReturnType.MONTHLY:
            return self.period_combo.currentText()
        return self.period_combo.currentData()

    def period_months(self):
        if self.return_type() == ReturnType.MONTHLY:
            return [self.period_combo.currentText()]
        return QUARTERS.get(self.period_combo.currentData(), [])

    def rebuild_file_section(self):
        """Show a forward/reverse picker pair per month of the selected period."""
        while self.file_layout.count():
            item = self.file_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self.selected_files = {}
        self.file_labels = {}

        for row, month in enumerate(self.period_months()):
            self.selected_files[month] = {"forward": "", "reverse": ""}
            self.file_layout.addWidget(QLabel(f"<b>{month}</b>"), row, 0)
            for col, kind in enumerate(("forward", "reverse")):
                label = QLabel(self._label_text(kind.capitalize(), ""))
                button = QPushButton(f"Select {kind.capitalize()} Excel")
                button.clicked.connect(lambda _=False, m=month, k=kind: self.select_file(m, k))
                self.file_labels[(month, kind)] = label
                self.file_layout.addWidget(label, row, 1 + col * 2)
                self.file_layout.addWidget(button, row, 2 + col * 2, alignment=Qt.AlignLeft)

    # --- Handlers ---
    def on_return_type_changed(self, _checked):
        self.fill_period_combo()
        self.rebuild_file_section()
        self.save_config()

    def on_period_changed(self, _text):
        self.rebuild_file_section()

    def change_output_folder(self):
        folder = QFileDialog.getExistingDirectory(self, "Select Output Folder", self.output_folder)
        if not folder:
            return
        self.output_folder = folder
        self.folder_label.setText(f"Output Folder: {self.output_folder}")
        self.save_config()

    def select_file(self, month, kind):
        file_path, _ = QFileDialog.getOpenFileName(
            self, f"Select {month} {kind} report", self.output_folder,
            "Excel Files (*.xlsx *.xls)"
        )
        if not file_path:
            return
        is_valid, msg = validate_settlement_excel(file_path)
        self.log(msg)
        if not is_valid:
            return
        self.selected_files[month][kind] = file_path
        self.file_labels[(month, kind)].setText(self._label_text(kind.capitalize(), file_path))

    def _selected_pairs(self):
        return {month: (files["forward"], files["reverse"]) for month, files in self.selected_files.items()}

    @handle_export_errors(file_type="GSTR-1 JSON")
    def generate_json(self):
        self.save_config()
        pairs = self._selected_pairs()
        if self.return_type() == ReturnType.MONTHLY:
            files = pairs.get(self.selected_period(), (None, None))
        else:
            files = pairs
        message, output_path = generate_gstr1_json(
            self.gstin_input.text().strip(),
            self.year_spin.value(),
            self.return_type(),
            self.selected_period(),
            files,
            output_folder=self.output_folder,
        )
        self.log(message)
        return output_path

    @handle_export_errors(file_type="Summary CSV")
    def export_summary_csv(self):
        missing_message = (ErrorMessages.MISSING_MONTHLY_FILES if self.return_type() == ReturnType.MONTHLY
                           else ErrorMessages.MISSING_QUARTERLY_FILES)
        rows = []
        for month, (forward_file, reverse_file) in self._selected_pairs().items():
            if not forward_file or not reverse_file:
                raise InputDataError(missing_message)
            rows.extend(load_report_rows(forward_file, reverse_file))

        output_path = os.path.join(self.output_folder, f"summary-{self.selected_period()}-{self.year_spin.value()}.csv")
        generate_summary_csv(rows, output_path)
        self.log(f"{UIConstants.ICON_SUCCESS} Summary of {len(rows)} rows written to {output_path}")
        log_operation("Summary CSV", self.selected_period(), len(rows), output_path)
        return output_path


if __name__ == "__main__":
    app = QApplication(sys.argv)
    w = DashboardApp()
    w.show()
    sys.exit(app.exec())
