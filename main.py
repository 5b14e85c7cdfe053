"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import logging
import os
import threading

from calendar_logic import CalendarDate
from formatting import format_date
from icon_gen import create_icon_image
from picker_window import DatePickerWindow
from settings import load_settings
from tray_icon import create_tray

log = logging.getLogger("mini_date_picker")


def main() -> None:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    copy_format = load_settings()["copy_format"]

    def on_commit(committed: CalendarDate) -> None:
        text = format_date(committed, copy_format)
        picker.root.clipboard_clear()
        picker.root.clipboard_append(text)
        log.info("Copied %s to clipboard", text)
        picker.hide()

    picker = DatePickerWindow(on_commit=on_commit)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        picker.root.after(0, picker.toggle)

    def on_today() -> None:
        picker.root.after(0, picker.controller.confirm_today)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            picker.root.destroy()
        picker.root.after(0, _quit)

    tray = create_tray(
        create_icon_image(), on_show, on_exit,
        on_today=on_today if picker.controller.show_today else None,
    )

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    picker.root.mainloop()


if __name__ == "__main__":
    main()
