# visualizer.py
import pygame

from rrsim.exporters import export_csv
from rrsim.stats import compute_stats

# Color scheme
COLORS = {
    'background': (11, 16, 40),
    'panel': (12, 19, 64),
    'border': (38, 53, 122),
    'text': (220, 220, 220),
    'title': (159, 176, 255),
    'ready': (70, 130, 180),
    'running': (50, 205, 50),
    'finished': (147, 112, 219),
    'idle': (180, 190, 255),
    'grid': (27, 37, 85),
}

PROCESS_PALETTE = [
    (79, 195, 247),
    (129, 199, 132),
    (186, 104, 200),
    (255, 183, 77),
    (229, 115, 115),
]


def process_color(index):
    return PROCESS_PALETTE[index % len(PROCESS_PALETTE)]


def timeline_length(scheduler):
    """Number of ticks the Gantt chart spans; grows if the run goes past the estimate"""
    processes = scheduler.processes()
    if not processes:
        return scheduler.clock + 1
    estimate = sum(p.burst for p in processes) + max(p.arrival for p in processes)
    return max(scheduler.clock + 1, estimate)


def block_rect(block, chart_x, chart_y, chart_w, chart_h, max_t, min_width=3):
    """Screen rectangle (x, y, w, h) for an ExecutionBlock on a chart spanning max_t ticks"""
    x1 = chart_x + (block.start / max_t) * chart_w
    x2 = chart_x + (block.end / max_t) * chart_w
    return (int(x1), chart_y, max(min_width, int(x2 - x1)), chart_h)


class PygameVisualizer:
    """
    Gantt chart and queue view driven by a SimulationDriver
    Controls: SPACE play/pause, S step, B step back, R reset,
    C export CSV, P export PNG, UP/DOWN speed, Q/ESC quit
    """

    def __init__(self, driver, width=1200, height=640, fps=2, csv_file="rr_trace.csv",
                 png_file="rr_screenshot.png"):
        pygame.init()
        self.driver = driver
        self.width = width
        self.height = height
        self.fps = fps
        self.csv_file = csv_file
        self.png_file = png_file

        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Round Robin CPU Scheduling")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 24)
        self.font_small = pygame.font.Font(None, 18)
        self.font_large = pygame.font.Font(None, 32)

        self.running = True
        self.paused = True
        self.step_mode = False
        self.message = "Engine initialized. Press SPACE to start."

        self.colors = {p.pid: process_color(i) for i, p in enumerate(driver.scheduler.processes())}

    @property
    def scheduler(self):
        return self.driver.scheduler

    def draw_text(self, text, x, y, color=None, font=None):
        if color is None:
            color = COLORS['text']
        if font is None:
            font = self.font
        text_surface = font.render(str(text), True, color)
        self.screen.blit(text_surface, (x, y))

    def draw_panel(self, x, y, width, height, title):
        """Draw a panel with title"""
        pygame.draw.rect(self.screen, COLORS['panel'], (x, y, width, height), border_radius=12)
        pygame.draw.rect(self.screen, COLORS['border'], (x, y, width, height), 2, border_radius=12)
        self.draw_text(title, x + 12, y + 8, color=COLORS['title'], font=self.font_small)

    def draw_process_box(self, pid, x, y, width, height, color):
        pygame.draw.rect(self.screen, color, (x, y, width, height))
        pygame.draw.rect(self.screen, COLORS['text'], (x, y, width, height), 1)
        text = str(pid) if pid is not None else "IDLE"
        text_surface = self.font_small.render(text, True, COLORS['background'])
        self.screen.blit(text_surface, text_surface.get_rect(center=(x + width // 2, y + height // 2)))

    def draw_gantt(self, x, y, width, height):
        """Draw every block so far; idle blocks are outlined"""
        self.draw_panel(x, y, width, height, "Gantt Chart")
        max_t = timeline_length(self.scheduler)
        chart_x, chart_y = x + 12, y + 36
        chart_w, chart_h = width - 24, height - 70

        for t in range(max_t + 1):
            gx = chart_x + (t / max_t) * chart_w
            pygame.draw.line(self.screen, COLORS['grid'], (gx, chart_y), (gx, chart_y + chart_h))

        for block in self.scheduler.blocks:
            rect = block_rect(block, chart_x, chart_y + 6, chart_w, chart_h - 12, max_t)
            if block.is_idle:
                pygame.draw.rect(self.screen, COLORS['idle'], rect, 3)
                self.draw_text("IDLE", rect[0] + 4, rect[1] + rect[3] // 2 - 6,
                               color=COLORS['idle'], font=self.font_small)
            else:
                pygame.draw.rect(self.screen, self.colors.get(block.pid, COLORS['running']), rect,
                                 border_radius=6)
                self.draw_text(block.pid, rect[0] + 4, rect[1] + rect[3] // 2 - 6,
                               color=COLORS['background'], font=self.font_small)

        self.draw_text(f"Clock: {self.scheduler.clock}", chart_x, chart_y + chart_h + 8,
                       color=COLORS['title'])

    def draw_queues(self, x, y, width, height):
        snapshot = self.scheduler.snapshot()
        self.draw_panel(x, y, width, height, "CPU / Ready Queue / Finished")

        box_w, box_h, margin = 60, 36, 10
        self.draw_text("CPU:", x + 12, y + 40, font=self.font_small)
        pid = snapshot['running']
        color = self.colors.get(pid, COLORS['running']) if pid is not None else COLORS['panel']
        self.draw_process_box(pid, x + 90, y + 30, box_w, box_h, color)
        self.draw_text(f"slice {snapshot['slices_used']}/{snapshot['quantum']}", x + 160, y + 40,
                       font=self.font_small)

        rows = (("Ready:", snapshot['ready'], COLORS['ready']),
                ("Finished:", snapshot['finished'], COLORS['finished']))
        for r, (label, pids, row_color) in enumerate(rows):
            ry = y + 80 + r * (box_h + margin)
            self.draw_text(label, x + 12, ry + 10, font=self.font_small)
            for i, qpid in enumerate(pids):
                bx = x + 90 + i * (box_w + margin)
                if bx + box_w < x + width:
                    self.draw_process_box(qpid, bx, ry, box_w, box_h, row_color)

    def draw_stats(self, x, y, width, height):
        """Draw simulation statistics"""
        self.draw_panel(x, y, width, height, "Statistics")
        stats = compute_stats(self.scheduler)
        lines = [
            f"Avg waiting:     {stats.average_waiting_time:.2f}",
            f"Avg turnaround:  {stats.average_turnaround_time:.2f}",
            f"Throughput:      {stats.throughput:.2f}/t",
            f"CPU utilization: {stats.cpu_utilization * 100:.1f}%",
            f"State:           {self.scheduler.state.value}",
        ]
        for i, line in enumerate(lines):
            self.draw_text(line, x + 12, y + 34 + i * 22, font=self.font_small)

    def draw_controls(self, x, y):
        controls = [
            "SPACE: Play/Pause   S: Step   B: Step Back   R: Reset",
            "C: Export CSV   P: Export PNG   Q/ESC: Quit",
            f"Speed: {self.fps} FPS (UP/DOWN)",
        ]
        for i, control in enumerate(controls):
            self.draw_text(control, x, y + i * 20, font=self.font_small)
        self.draw_text(self.message, x, y + len(controls) * 20 + 6, color=COLORS['title'],
                       font=self.font_small)

    def draw_frame(self):
        """Draw a single frame"""
        self.screen.fill(COLORS['background'])
        margin = 20
        self.draw_gantt(margin, 50, self.width - 2 * margin, 180)
        self.draw_queues(margin, 250, 700, 180)
        self.draw_stats(740, 250, self.width - 740 - margin, 180)
        self.draw_controls(margin, 450)

        title = "Round Robin CPU Scheduling"
        if self.paused:
            title += " [PAUSED]"
        self.draw_text(title, self.width // 2 - 160, 12, font=self.font_large)
        pygame.display.flip()

    def handle_events(self):
        """Handle pygame events"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key == pygame.K_s:
                    self.paused = True
                    self.step_mode = True
                elif event.key == pygame.K_b:
                    self.paused = True
                    if self.driver.step_back():
                        self.message = "Reverted one step back."
                    else:
                        self.message = "No previous step to revert to."
                elif event.key == pygame.K_r:
                    self.paused = True
                    self.driver.reset()
                    self.message = "Engine reset."
                elif event.key == pygame.K_c:
                    export_csv(self.scheduler, self.csv_file)
                    self.message = f"Trace exported to {self.csv_file}"
                elif event.key == pygame.K_p:
                    pygame.image.save(self.screen, self.png_file)
                    self.message = f"Screenshot saved to {self.png_file}"
                elif event.key in (pygame.K_q, pygame.K_ESCAPE):
                    self.running = False
                elif event.key == pygame.K_UP:
                    self.fps = min(60, self.fps + 1)
                elif event.key == pygame.K_DOWN:
                    self.fps = max(1, self.fps - 1)

    def run_simulation(self):
        """Run the visualization until the window is closed"""
        while self.running:
            self.handle_events()

            if self.scheduler.has_jobs() and (not self.paused or self.step_mode):
                self.driver.step()
                self.step_mode = False
                if not self.scheduler.has_jobs():
                    self.paused = True
                    self.message = "All processes completed."

            self.draw_frame()
            self.clock.tick(self.fps)

        pygame.quit()


def run_pygame_visualization(driver, fps=2, csv_file="rr_trace.csv", png_file="rr_screenshot.png"):
    """
    Run pygame visualization of the scheduler

    Args:
        driver: SimulationDriver to step
        fps: Frames per second (simulation speed)
    """
    visualizer = PygameVisualizer(driver, fps=fps, csv_file=csv_file, png_file=png_file)
    visualizer.run_simulation()
