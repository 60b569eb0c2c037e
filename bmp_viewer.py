import logging
import os
import tkinter as tk
from tkinter import filedialog, messagebox, simpledialog
from PIL import ImageTk

import viewer_style as style
from bmp8 import Image8
from bmp_errors import BMPError
from bmpimage import default_save_path, image_info, load_image, save_image
from filters import apply_named_filter
from histogram import equalize
from image_processing import brightness, grayscale, negative, threshold
from preview import histogram_for_display, plot_histogram_image, to_pil_image

logger = logging.getLogger(__name__)

FILTER_LABELS = [
    ("Box Blur (3x3)", "box_blur"),
    ("Gaussian Blur (3x3)", "gaussian_blur"),
    ("Sharpen (3x3)", "sharpen"),
    ("Outline", "outline"),
    ("Emboss (3x3)", "emboss"),
]

# ==== BMP Viewer ====
class BMPViewer(tk.Frame):
    def __init__(self, master, file_path=None):
        super().__init__(master, bg=style.BG_MAIN)
        self.master = master
        self.pack(fill="both", expand=True)

        # Toolbar
        toolbar = tk.Frame(self, bg=style.BG_TOOLBAR, padx=10, pady=8)
        toolbar.pack(side="top", fill="x")
        for text, cmd in (("Open BMP", self.open_bmp), ("Save As", self.save_bmp),
                          ("Zoom In", self.zoom_in), ("Zoom Out", self.zoom_out)):
            tk.Button(toolbar, text=text, command=cmd,
                      bg=style.BG_BUTTON, fg=style.FG_BUTTON,
                      font=style.FONT_BUTTON, relief="flat", padx=10, pady=4).pack(side="left", padx=5)

        # Operations toolbar
        ops = tk.Frame(self, bg=style.BG_MAIN, padx=10, pady=4)
        ops.pack(side="top", fill="x")
        tk.Label(ops, text="Operations:", font=style.FONT_HEADER,
                 bg=style.BG_MAIN, fg=style.FG_TEXT).pack(side="left", padx=(0, 10))
        tk.Button(ops, text="Negative", command=lambda: self.run(negative)).pack(side="left", padx=3)
        tk.Button(ops, text="Brightness…", command=self.ui_brightness).pack(side="left", padx=3)
        self.depth_button = tk.Button(ops, text="Threshold…", command=self.ui_threshold_or_gray)
        self.depth_button.pack(side="left", padx=3)
        for label, kind in FILTER_LABELS:
            tk.Button(ops, text=label, command=lambda k=kind: self.run(apply_named_filter, k)).pack(side="left", padx=3)
        tk.Button(ops, text="Equalize", command=lambda: self.run(equalize)).pack(side="left", padx=3)

        # Main Frame
        main_frame = tk.Frame(self, bg=style.BG_MAIN)
        main_frame.pack(fill="both", expand=True, padx=10, pady=10)

        # Canvas frame
        canvas_frame = tk.Frame(main_frame, bg=style.BG_MAIN)
        canvas_frame.pack(side="left", fill="both", expand=True, padx=(0,10))
        self.canvas = tk.Canvas(canvas_frame, bg=style.BG_PANEL, cursor="cross")
        self.canvas.pack(side="left", fill="both", expand=True)
        self.scroll_y = tk.Scrollbar(canvas_frame, orient="vertical", command=self.canvas.yview)
        self.scroll_y.pack(side="right", fill="y")
        self.scroll_x = tk.Scrollbar(main_frame, orient="horizontal", command=self.canvas.xview)
        self.scroll_x.pack(side="bottom", fill="x")
        self.canvas.configure(yscrollcommand=self.scroll_y.set, xscrollcommand=self.scroll_x.set)

        self.canvas.bind("<Button-1>", self.get_pixel_info)
        self.canvas.bind("<MouseWheel>", self.on_mousewheel)
        self.canvas.bind("<Button-4>", self.on_mousewheel_linux)
        self.canvas.bind("<Button-5>", self.on_mousewheel_linux)

        # Info Panel
        info_frame = tk.Frame(main_frame, bg=style.BG_PANEL, bd=2, relief="groove", padx=15, pady=15)
        info_frame.pack(side="right", fill="y")
        tk.Label(info_frame, text="Pixel Info", font=style.FONT_HEADER,
                 bg=style.BG_PANEL, fg=style.FG_TEXT).pack(anchor="w", pady=(0,5))
        self.pixel_label = tk.Label(info_frame,
            text="Click on the image to view pixel RGB values.",
            font=style.FONT_TEXT, justify="left", bg=style.BG_PANEL, fg=style.FG_SUBTEXT)
        self.pixel_label.pack(anchor="w", pady=(0,10))
        self.color_preview = tk.Canvas(info_frame, width=80, height=50, bg="#cccccc", bd=1, relief="solid")
        self.color_preview.pack(anchor="w", pady=(0,20))
        tk.Frame(info_frame, height=2, bg="#e0e0e0").pack(fill="x", pady=10)
        tk.Label(info_frame, text="Header Info", font=style.FONT_HEADER,
                 bg=style.BG_PANEL, fg=style.FG_TEXT).pack(anchor="w", pady=(0,5))
        self.header_text = tk.Text(info_frame, height=10, width=36,
                                   font=style.FONT_MONO, bg="#f9f9f9", fg="#222",
                                   relief="flat", wrap="none")
        self.header_text.pack(anchor="w", pady=(0,5))
        self.header_text.configure(state="disabled")
        tk.Label(info_frame, text="Histogram", font=style.FONT_HEADER,
                 bg=style.BG_PANEL, fg=style.FG_TEXT).pack(anchor="w", pady=(10,5))
        self.hist_label = tk.Label(info_frame, bg=style.BG_PANEL)
        self.hist_label.pack(anchor="w")

        self.status = tk.Label(self, text="", anchor="w", bg=style.BG_MAIN, fg=style.FG_SUBTEXT)
        self.status.pack(side="bottom", fill="x", padx=10)

        # Vars
        self.bmp = None
        self.image = None
        self.tk_img = None
        self.hist_img = None
        self.zoom_factor = 1.0
        self.filename = file_path

        if file_path:
            self.load_bmp(file_path)

    # ==== File Handling ====
    def open_bmp(self):
        file_path = filedialog.askopenfilename(filetypes=[("BMP files","*.bmp")])
        if file_path:
            self.load_bmp(file_path)

    def load_bmp(self, file_path):
        try:
            self.bmp = load_image(file_path)
        except BMPError as e:
            logger.error("Cannot open %s: %s", file_path, e)
            messagebox.showerror("Error", f"Failed to open BMP file:\n{e}")
            return
        self.filename = file_path
        self.zoom_factor = 1.0
        is_8bit = isinstance(self.bmp, Image8)
        self.depth_button.config(text="Threshold…" if is_8bit else "Grayscale")
        self.refresh(f"Loaded {file_path} ({self.bmp.color_depth}-bit)")

    def save_bmp(self):
        if not self.ensure_loaded(): return
        file_path = filedialog.asksaveasfilename(
            defaultextension=".bmp",
            initialfile=os.path.basename(default_save_path(self.filename)),
            filetypes=[("BMP files","*.bmp")])
        if not file_path: return
        try:
            save_image(file_path, self.bmp)
        except BMPError as e:
            logger.error("Cannot save %s: %s", file_path, e)
            messagebox.showerror("Error", f"Failed to save BMP file:\n{e}")
            return
        self.status.config(text=f"Saved to {file_path}")

    def ensure_loaded(self):
        if self.bmp is None:
            messagebox.showwarning("No image", "Open a BMP image first.")
            return False
        return True

    # ==== Operations ====
    def run(self, op, *args):
        if not self.ensure_loaded(): return
        try:
            op(self.bmp, *args)
        except BMPError as e:
            messagebox.showerror("Error", f"Operation failed:\n{e}")
            return
        self.refresh(f"Applied {op.__name__}{' ' + str(args[0]) if args else ''}")

    def ui_brightness(self):
        if not self.ensure_loaded(): return
        value = simpledialog.askinteger("Brightness", "Adjustment value (-255 to 255):",
                                        minvalue=-255, maxvalue=255)
        if value is None: return
        self.run(brightness, value)

    def ui_threshold_or_gray(self):
        if not self.ensure_loaded(): return
        if isinstance(self.bmp, Image8):
            t = simpledialog.askinteger("Threshold", "Threshold value (0 to 255):",
                                        minvalue=0, maxvalue=255)
            if t is None: return
            self.run(threshold, t)
        else:
            self.run(grayscale)

    # ==== Display & Zoom ====
    def refresh(self, note=""):
        self.image = to_pil_image(self.bmp)
        self.display_image()
        self.show_header_info()
        self.show_histogram()
        self.status.config(text=note)

    def display_image(self):
        if self.image:
            w = max(1, int(self.image.width*self.zoom_factor))
            h = max(1, int(self.image.height*self.zoom_factor))
            self.tk_img = ImageTk.PhotoImage(self.image.resize((w,h)))
            self.canvas.delete("all")
            self.canvas.create_image(0,0, anchor="nw", image=self.tk_img)
            self.canvas.config(scrollregion=self.canvas.bbox("all"))

    def zoom_in(self): self.zoom_factor*=1.25; self.display_image()
    def zoom_out(self): self.zoom_factor/=1.25; self.display_image()
    def on_mousewheel(self,event): self.zoom_in() if event.delta>0 else self.zoom_out()
    def on_mousewheel_linux(self,event):
        if event.num==4: self.zoom_in()
        elif event.num==5: self.zoom_out()

    # ==== Pixel info ====
    def get_pixel_info(self,event):
        if self.image:
            x=int(self.canvas.canvasx(event.x)/self.zoom_factor)
            y=int(self.canvas.canvasy(event.y)/self.zoom_factor)
            if 0<=x<self.image.width and 0<=y<self.image.height:
                r,g,b=self.image.getpixel((x,y))[:3]
                self.pixel_label.config(text=f"X:{x}\nY:{y}\nR:{r}\nG:{g}\nB:{b}")
                self.color_preview.config(bg=f"#{r:02x}{g:02x}{b:02x}")

    # ==== Header info ====
    def show_header_info(self):
        text="\n".join(f"{k}: {v}" for k,v in image_info(self.bmp, self.filename).items())
        self.header_text.configure(state="normal")
        self.header_text.delete("1.0","end")
        self.header_text.insert("1.0",text)
        self.header_text.configure(state="disabled")

    # ==== Histogram ====
    def show_histogram(self):
        color = style.HISTOGRAM_COLOR_8 if isinstance(self.bmp, Image8) else style.HISTOGRAM_COLOR_24
        hist_pil = plot_histogram_image(histogram_for_display(self.bmp), color=color)
        self.hist_img = ImageTk.PhotoImage(hist_pil)
        self.hist_label.config(image=self.hist_img)

# ==== Main ====
if __name__=="__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    root=tk.Tk()
    root.title("BMP Viewer")
    root.geometry("1200x800")
    app=BMPViewer(root)
    root.mainloop()
