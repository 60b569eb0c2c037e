import argparse
import logging
import tkinter as tk
from tkinter import filedialog
from bmp_viewer import BMPViewer

class ImageApp(tk.Tk):
    def __init__(self, file_path=None):
        super().__init__()
        self.title("BMP Lab")
        self.geometry("1200x800")
        self.viewer_frame = None

        # Menu
        menubar = tk.Menu(self)
        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="Open BMP", command=self.open_bmp)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.quit)
        menubar.add_cascade(label="File", menu=file_menu)
        self.config(menu=menubar)

        self.show_viewer(file_path)

    def show_viewer(self, file_path):
        if self.viewer_frame:
            self.viewer_frame.destroy()
        self.viewer_frame = BMPViewer(self, file_path)
        self.viewer_frame.pack(fill="both", expand=True)

    def open_bmp(self):
        file_path = filedialog.askopenfilename(filetypes=[("BMP Files", "*.bmp")])
        if file_path:
            self.show_viewer(file_path)

def main():
    parser = argparse.ArgumentParser(description="View and edit 8-bit and 24-bit BMP images.")
    parser.add_argument("image", nargs="?", help="BMP file to open on start")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug details")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")
    app = ImageApp(args.image)
    app.mainloop()

if __name__ == "__main__":
    main()
