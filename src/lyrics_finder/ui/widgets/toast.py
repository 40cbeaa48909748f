from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QEasingCurve, QPoint, QPropertyAnimation
from PySide6.QtWidgets import (
    QWidget,
    QFrame,
    QLabel,
    QHBoxLayout,
    QToolButton,
    QGraphicsOpacityEffect,
)

from lyrics_finder.core.state import Notice


def _colors(kind: str) -> tuple[str, str, str]:
    """
    Returns (bg, border, text).
    """
    kind = (kind or "info").lower()
    if kind == "success":
        return "#052e1a", "#16a34a", "#e5e7eb"
    if kind == "warning":
        return "#2a1a05", "#f59e0b", "#e5e7eb"
    if kind == "error":
        return "#2a0a0a", "#ef4444", "#e5e7eb"
    return "#0b1222", "#38bdf8", "#e5e7eb"


class ToastWidget(QFrame):
    def __init__(self, notice: Notice, parent: QWidget, on_close):
        super().__init__(parent)
        self.notice = notice

        bg, border, text = _colors(notice.notify_type)

        self.setObjectName("Toast")
        self.setStyleSheet(f"""
        QFrame#Toast {{
            background: {bg};
            border: 1px solid {border};
            border-radius: 14px;
        }}
        QLabel {{
            color: {text};
            font-size: 12px;
        }}
        QToolButton {{
            border: none;
            background: transparent;
            color: {text};
            padding: 2px 6px;
        }}
        """)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        root = QHBoxLayout(self)
        root.setContentsMargins(12, 10, 10, 10)
        root.setSpacing(10)

        self.lbl = QLabel(notice.message)
        self.lbl.setWordWrap(True)

        self.btn_close = QToolButton()
        self.btn_close.setText("✕")
        self.btn_close.setCursor(Qt.CursorShape.PointingHandCursor)
        self.btn_close.clicked.connect(on_close)

        root.addWidget(self.lbl, 1)
        root.addWidget(self.btn_close, 0, Qt.AlignmentFlag.AlignTop)

        self._opacity = QGraphicsOpacityEffect(self)
        self._opacity.setOpacity(0.0)
        self.setGraphicsEffect(self._opacity)

        self._anims: list[QPropertyAnimation] = []

    def play_in(self, end_pos: QPoint):
        start_pos = end_pos + QPoint(0, -12)  # slide down into place
        self.move(start_pos)

        anim_pos = QPropertyAnimation(self, b"pos", self)
        anim_pos.setDuration(180)
        anim_pos.setStartValue(start_pos)
        anim_pos.setEndValue(end_pos)
        anim_pos.setEasingCurve(QEasingCurve.Type.OutCubic)

        anim_opacity = QPropertyAnimation(self._opacity, b"opacity", self)
        anim_opacity.setDuration(180)
        anim_opacity.setStartValue(0.0)
        anim_opacity.setEndValue(1.0)
        anim_opacity.setEasingCurve(QEasingCurve.Type.OutCubic)

        self._anims = [anim_pos, anim_opacity]
        self.show()
        anim_pos.start()
        anim_opacity.start()

    def play_out(self, on_done):
        anim = QPropertyAnimation(self._opacity, b"opacity", self)
        anim.setDuration(180)
        anim.setStartValue(self._opacity.opacity())
        anim.setEndValue(0.0)
        anim.setEasingCurve(QEasingCurve.Type.InCubic)
        anim.finished.connect(on_done)
        self._anims = [anim]
        anim.start()


class ToastOverlay(QWidget):
    """
    Overlay that shows the controller's current notice in the top-right
    corner of its host. One notice at a time: a new one replaces the old.
    The dismiss timer lives in SearchController, not here.
    """
    def __init__(self, host: QWidget, on_close=None):
        super().__init__(host)
        self.host = host
        self.on_close = on_close
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, False)

        self._toast: Optional[ToastWidget] = None
        self._margin = 14
        self.hide()

    def current_message(self) -> str | None:
        return self._toast.notice.message if self._toast else None

    def set_notice(self, notice: Optional[Notice]):
        if notice is None:
            self.hide_notice()
            return
        self.show_notice(notice)

    def show_notice(self, notice: Notice):
        self._drop_toast()

        toast = ToastWidget(notice, parent=self, on_close=self._close_clicked)
        toast.setFixedWidth(min(420, max(260, self.host.width() // 2)))
        toast.adjustSize()
        self._toast = toast

        self._place()
        self.show()
        self.raise_()
        toast.play_in(QPoint(self._margin, self._margin))

    def hide_notice(self):
        toast = self._toast
        if toast is None:
            return
        self._toast = None

        def remove():
            toast.hide()
            toast.deleteLater()
            if self._toast is None:
                self.hide()

        toast.play_out(remove)

    def reposition(self):
        if self._toast is not None:
            self._place()

    def _place(self):
        # overlay only covers the toast so the window stays clickable
        toast = self._toast
        w = toast.width() + 2 * self._margin
        h = toast.sizeHint().height() + 2 * self._margin
        self.setGeometry(self.host.width() - w, 0, w, h)

    def _drop_toast(self):
        if self._toast is not None:
            self._toast.hide()
            self._toast.deleteLater()
            self._toast = None

    def _close_clicked(self):
        if self.on_close:
            self.on_close()
        else:
            self.hide_notice()
