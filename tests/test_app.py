import json
import threading
import unittest

from thermcam.app import create_app
from thermcam.config import Settings
from thermcam.palette import build_palette
from thermcam.sampler import SyntheticSampler
from thermcam.streamer import ThermalStreamer

PREFIX = "data:image/png;base64,"


class TestApp(unittest.TestCase):

    def setUp(self):
        self.settings = Settings(mock=True, period_ms=50, width=48)
        self.streamer = ThermalStreamer(SyntheticSampler(seed=1), build_palette(128), self.settings)
        self.addCleanup(self.streamer.stop, 2)
        self.app = create_app(self.settings, self.streamer)
        self.client = self.app.test_client()

    def test_frame_before_first_render(self):
        resp = self.client.get("/frame")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["Cache-Control"], "no-cache")
        self.assertEqual(resp.get_data(as_text=True), PREFIX)

    def test_frame_serves_latest(self):
        self.streamer.step_sample()
        frame = self.streamer.step_render()
        body = self.client.get("/frame").get_data(as_text=True)
        self.assertEqual(body, PREFIX + frame.data)

    def test_index_starts_one_render_loop(self):
        for _ in range(3):
            resp = self.client.get("/")
            self.assertEqual(resp.status_code, 200)
        html = resp.get_data(as_text=True)
        self.assertIn("startPolling(50)", html)
        self.assertIn("/public/thermcam.js", html)
        loops = [t for t in threading.enumerate() if t.name == "thermcam-render"]
        self.assertEqual(len(loops), 1)

    def test_public_assets(self):
        resp = self.client.get("/public/thermcam.js")
        self.assertEqual(resp.status_code, 200)
        self.assertIn(b"startPolling", resp.data)
        resp.close()
        self.assertEqual(self.client.get("/public/missing.js").status_code, 404)

    def test_status(self):
        data = self.client.get("/status").get_json()
        self.assertEqual(data["mode"], "mock")
        self.assertEqual(data["frame"], 0)
        self.assertEqual(data["period_ms"], 50)

    def test_status_is_strict_json_with_nan_readings(self):
        self.streamer.grid.set((float("nan"),) * 64)
        body = self.client.get("/status").get_data(as_text=True)
        data = json.loads(body, parse_constant=lambda c: self.fail(f"non-JSON constant {c}"))
        self.assertIsNone(data["mean"])

    def test_apps_are_independent(self):
        other = ThermalStreamer(SyntheticSampler(seed=2), build_palette(16), self.settings)
        other.step_sample()
        other.step_render()
        other_client = create_app(self.settings, other).test_client()
        self.assertEqual(self.client.get("/frame").get_data(as_text=True), PREFIX)
        self.assertNotEqual(other_client.get("/frame").get_data(as_text=True), PREFIX)
        self.assertEqual(other_client.get("/status").get_json()["frame"], 1)


if __name__ == "__main__":
    unittest.main()
