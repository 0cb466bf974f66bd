# src/app/viewer.py
#!/usr/bin/env python3
"""
Crane Unloading Viewer — step through either solver on a dock map

- Keyboard:
    [1]/[2]/[3]  -> switch map
    [G]          -> random dock
    [E]/[D]      -> select algorithm (Exhaustive / Dynamic programming)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Config:
- ENV: CRANES_ALGO=exhaustive|dynprog, CRANES_MAP_DIR=<dir>
- CLI: --algo=exhaustive|dynprog
"""

# --- bootstrap import path so `from src...` works when run as a script ---
import sys, os, time
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -------------------------------------------------------------------------

from typing import Tuple, Optional
import pygame

from src.core.errors import CraneError
from src.core.types import Grid, StepResult, Coord, Path as CranePath
from src.core.exhaustive import ExhaustiveAlgo
from src.core.dynprog import DynProgAlgo
from src.core.grid_io import load_map, random_grid


# ---------- Config resolution ----------
ALGO_LABELS = {"exhaustive": "Exhaustive", "dynprog": "Dynamic programming"}


def resolve_algo() -> str:
    algo = os.getenv("CRANES_ALGO", "dynprog").lower()
    for arg in sys.argv:
        if arg.startswith("--algo="):
            algo = arg.split("=", 1)[1].lower()
    return "exhaustive" if algo in ("exhaustive", "brute", "e") else "dynprog"


MAP_DIR = Path(os.getenv("CRANES_MAP_DIR", str(_REPO_ROOT / "maps")))
MAP_FILES = {
    "01_small_dock":  MAP_DIR / "01_small_dock.json",
    "02_harbour":     MAP_DIR / "02_harbour.json",
    "03_walled_off":  MAP_DIR / "03_walled_off.json",
}
MAP_KEYS = list(MAP_FILES)
RANDOM_SIZE = (7, 9)

PANEL_W = 420            # right band: metrics + buttons
GRID_MARGIN = 16
FONT_NAME = None  # default pygame font

# Colors
WHITE        = (255,255,255)
BLACK        = (  0,  0,  0)
BLUE         = ( 70,130,180)
RED          = (220, 50, 47)
DOCK_GRAY    = (200,200,200)
BUILDING     = ( 52, 58, 70)
CRANE_TEXT   = ( 30, 34, 40)
REACHED_A    = (0,150,255,90)
BLOCKED_A    = (255,0,120,90)
PATH_MINT    = (0,255,200)

CARD_BG      = (24,28,36,220)
CARD_HI      = (255,255,255,18)
TEXT_LIGHT   = (230,235,240)
ACCENT_GOLD  = (255,210,0)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if self.active and self.togglable:
            bg = (58, 86, 160, 235)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, map_key: str = "custom"):
        pygame.init()

        self.grid = grid
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        win_w, win_h = 1100, 640
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption(f"Crane Unloading — {map_key}")

        self._buttons: list[UIButton] = []
        self.selected_map_key = map_key
        self.selected_algo = resolve_algo()
        self.running = False
        self.state = "Idle"
        self.status_note = ""

        self._layout(win_w, win_h)

        self.reached: set[Coord] = set()
        self.blocked: set[Coord] = set()
        self.current: Optional[Coord] = None
        self.path: Optional[CranePath] = None

        self.clock = pygame.time.Clock()
        self.steps_per_sec = 8
        self._last_step_t = 0.0

        self.algo = self._make_algo(self.selected_algo)
        self._reset_overlays()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Integer cell size that fits the window, grid centered left of the panel."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = max(16, min(avail_w // self.grid.columns, avail_h // self.grid.rows))

        plate_w = self.grid.columns * self.cell_size + 2 * GRID_MARGIN
        plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN
        left_x = max(0, (win_w - PANEL_W - plate_w) // 2)
        top_y = max(0, (win_h - plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, plate_w, plate_h)
        self._grid_origin = (left_x + GRID_MARGIN, top_y + GRID_MARGIN)
        self._right_band = pygame.Rect(max(self.canvas_rect.right, win_w - PANEL_W), 0,
                                       PANEL_W, win_h)
        self.font_cell = pygame.font.Font(FONT_NAME, max(12, self.cell_size // 2))
        self._build_buttons()

    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        if t0 - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        if self.algo is None:
            return
        res: StepResult = self.algo.step()
        if self.selected_algo == "exhaustive":
            # only the latest candidate is interesting
            self.reached = set(res.reached)
            self.blocked = set(res.blocked)
        else:
            self.reached.update(res.reached)
            self.blocked.update(res.blocked)
        self.current = res.current
        if res.path is not None:
            self.path = res.path
        if res.status == "done":
            self.state = "Done"; self.running = False
        elif res.status == "no_path":
            self.state = "No path"; self.running = False
            self.status_note = getattr(self.algo, "reason", "") or "destination unreachable"
            self.path = None
        else:
            self.state = "Running" if self.running else "Idle"
        if res.metrics:
            self._last_metrics = res.metrics
        self._refresh_active_states()

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif e.key in (pygame.K_1, pygame.K_2, pygame.K_3):
                    self._switch_map(MAP_KEYS[e.key - pygame.K_1])
                elif e.key == pygame.K_g:
                    self._random_map()
                elif e.key == pygame.K_e:
                    self._switch_algo("exhaustive")
                elif e.key == pygame.K_d:
                    self._switch_algo("dynprog")
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(640, e.w), max(480, e.h)),
                                                      pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

    def _make_algo(self, key: str):
        algo = ExhaustiveAlgo(name=ALGO_LABELS[key]) if key == "exhaustive" \
            else DynProgAlgo(name=ALGO_LABELS[key])
        try:
            algo.init(self.grid)
        except CraneError as ex:
            self.status_note = str(ex)
            self.state = "Unsupported"
            return None
        self.status_note = ""
        self.state = "Idle"
        return algo

    def _set_grid(self, grid: Grid, key: str):
        self.grid = grid
        self.selected_map_key = key
        pygame.display.set_caption(f"Crane Unloading — {key}")
        self.running = False
        self.algo = self._make_algo(self.selected_algo)
        self._reset_overlays()
        self._layout(*self.screen.get_size())

    def _switch_map(self, key: str):
        if key not in MAP_FILES: return
        try:
            self._set_grid(load_map(MAP_FILES[key]), key)
        except (OSError, CraneError) as ex:
            print(f"Failed to load map {key}: {ex}")

    def _random_map(self):
        self._set_grid(random_grid(*RANDOM_SIZE), "random")

    def _switch_algo(self, key: str):
        self.selected_algo = key
        self.running = False
        self.algo = self._make_algo(key)
        self._reset_overlays()
        self._refresh_active_states()

    def _reset_overlays(self):
        self.reached.clear()
        self.blocked.clear()
        self.current = None
        self.path = None
        self._last_metrics = {
            "algo": ALGO_LABELS[self.selected_algo],
            "work": 0,
            "work_total": None,
            "path_len": 0,
            "total_cranes": None,
        }

    def _reset(self):
        self.running = False
        if self.algo is not None:
            self.algo.reset()
            self.state = "Idle"
        self._reset_overlays()
        self._refresh_active_states()

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = tuple(int(a + (b - a) * t) for a, b in zip(top, bot))
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _cell_rect(self, r: int, c: int) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        return pygame.Rect(ox + c*cs, oy + r*cs, cs, cs)

    def _draw_grid(self):
        cs = self.cell_size

        for r in range(self.grid.rows):
            for c in range(self.grid.columns):
                rect = self._cell_rect(r, c)
                if self.grid.is_building(r, c):
                    pygame.draw.rect(self.screen, BUILDING, rect)
                else:
                    pygame.draw.rect(self.screen, DOCK_GRAY, rect)
                    n = self.grid.cranes_at(r, c)
                    if n:
                        txt = self.font_cell.render(str(n), True, CRANE_TEXT)
                        self.screen.blit(txt, txt.get_rect(center=rect.center))
                pygame.draw.rect(self.screen, BLACK, rect, 1)

        for cells, color in ((self.reached, REACHED_A), (self.blocked, BLOCKED_A)):
            for (r, c) in cells:
                s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(color)
                self.screen.blit(s, self._cell_rect(r, c).topleft)

        if self.path is not None and len(self.path) >= 1:
            pts = [self._cell_rect(r, c).center for (r, c) in self.path.positions()]
            pygame.draw.lines(self.screen, PATH_MINT, False, pts, 5)

        self._draw_badge(self.grid.origin, BLUE, "S")
        self._draw_badge(self.grid.destination, RED, "D")

    def _draw_badge(self, cell: Coord, color: Tuple[int,int,int], label: str):
        rect = self._cell_rect(*cell)
        cx, cy = rect.left + self.cell_size // 5, rect.top + self.cell_size // 5
        pygame.draw.circle(self.screen, color, (cx, cy), max(6, self.cell_size // 6))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=(cx, cy)))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: str | None = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Reset", self._reset);       y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed −", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))
        y += h + gap

        add("Algo: Exhaustive", lambda: self._switch_algo("exhaustive"), togglable=True, store_as="btn_algo_e"); y += h + gap
        add("Algo: Dynamic programming", lambda: self._switch_algo("dynprog"), togglable=True, store_as="btn_algo_d"); y += h + gap

        for i, key in enumerate(MAP_KEYS):
            add(f"Map {i+1}: {key[3:].replace('_', ' ')}", lambda k=key: self._switch_map(k),
                togglable=True, store_as=f"btn_map{i+1}")
            y += h + gap
        add("Random dock", self._random_map, togglable=True, store_as="btn_random")

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
        if hasattr(self, "btn_algo_e"):
            self.btn_algo_e.set_active(self.selected_algo == "exhaustive")
        if hasattr(self, "btn_algo_d"):
            self.btn_algo_d.set_active(self.selected_algo == "dynprog")
        for i, key in enumerate(MAP_KEYS):
            btn = getattr(self, f"btn_map{i+1}", None)
            if btn:
                btn.set_active(self.selected_map_key == key)
        if hasattr(self, "btn_random"):
            self.btn_random.set_active(self.selected_map_key == "random")

    def _toggle_run(self):
        if self.algo is None or self.state in ("Done", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(120, self.steps_per_sec + dv)))

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card = pygame.Surface((rb.width - 20, 210), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = self._last_metrics
        unit = "Candidates" if self.selected_algo == "exhaustive" else "Cells"
        line(m.get("algo", ALGO_LABELS[self.selected_algo]), big=True, color=ACCENT_GOLD)
        work_total = m.get("work_total")
        line(f"{unit}: {m.get('work', 0)}" + (f" / {work_total}" if work_total else ""))
        cranes = m.get("total_cranes")
        if cranes is None and self.path is not None:
            cranes = self.path.total_cranes()
        line(f"Cranes: {cranes if cranes is not None else '-'}")
        line(f"Path Len: {len(self.path) if self.path is not None else 0}")
        line(f"State: {self.state}")
        if self.status_note:
            line(self.status_note[:44], color=RED)
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main():
    key = MAP_KEYS[0]
    try:
        grid = load_map(MAP_FILES[key])
    except (OSError, CraneError) as ex:
        print(f"Failed to load default map: {ex}")
        sys.exit(1)
    Viewer(grid, key).run()

if __name__ == "__main__":
    main()
