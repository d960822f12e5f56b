"""Floating legend showing the active layer's colour ramp."""

from typing import Optional

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QColor, QLinearGradient, QPainter
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from src.models.legend import Legend


class GradientBar(QWidget):
    """Vertical gradient, low colour at the bottom."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.stops: list[tuple[float, str]] = []
        self.setFixedSize(24, 150)

    def set_stops(self, stops: list[tuple[float, str]]):
        self.stops = stops
        self.update()

    def paintEvent(self, a0):
        painter = QPainter(self)
        rect = self.rect()
        gradient = QLinearGradient(QPointF(0, rect.bottom()), QPointF(0, rect.top()))
        for position, color in self.stops:
            gradient.setColorAt(position, QColor(color))
        painter.fillRect(rect, gradient)
        painter.setPen(QColor("#666666"))
        painter.drawRect(rect.adjusted(0, 0, -1, -1))
        painter.end()


class LegendWidget(QFrame):
    """Legend panel; hidden when no layer is visible."""

    def __init__(self, parent=None):
        """Initialize legend widget."""
        super().__init__(parent)
        self.legend: Optional[Legend] = None
        self.init_ui()

    def init_ui(self):
        """Initialize the UI."""
        self.setObjectName("mapLegend")
        self.setStyleSheet(
            "QFrame#mapLegend { background-color: rgba(255, 255, 255, 235); border-radius: 6px; }"
        )

        layout = QVBoxLayout()
        layout.setContentsMargins(10, 10, 10, 10)

        self.title_label = QLabel()
        self.title_label.setStyleSheet("font-weight: bold;")
        layout.addWidget(self.title_label)

        body = QHBoxLayout()
        self.gradient_bar = GradientBar()
        body.addWidget(self.gradient_bar)

        labels = QVBoxLayout()
        self.high_label = QLabel()
        self.low_label = QLabel()
        labels.addWidget(self.high_label, alignment=Qt.AlignmentFlag.AlignTop)
        labels.addStretch(1)
        labels.addWidget(self.low_label, alignment=Qt.AlignmentFlag.AlignBottom)
        body.addLayout(labels)

        layout.addLayout(body)
        self.setLayout(layout)
        self.hide()

    def set_legend(self, legend: Optional[Legend]):
        """
        Show the legend for a layer, or hide the panel.

        Args:
            legend: Legend to display, or None to hide
        """
        self.legend = legend
        if legend is None:
            self.hide()
            return

        self.title_label.setText(legend.title)
        self.gradient_bar.set_stops(legend.gradient_stops())
        self.high_label.setText(legend.high_label)
        self.low_label.setText(legend.low_label)
        self.adjustSize()
        self.show()
        self.raise_()
