import logging
import sys

from thermcam.app import create_app
from thermcam.config import build_parser, parse_args
from thermcam.errors import ConfigError, SensorError
from thermcam.palette import build_palette
from thermcam.sampler import open_sampler
from thermcam.streamer import ThermalStreamer

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    try:
        settings = parse_args(argv)
    except ConfigError as e:
        build_parser().error(str(e))  # exits with status 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    palette = build_palette(settings.palette_size, settings.palette)
    try:
        sampler = open_sampler(settings)
    except SensorError as e:
        logger.critical("%s", e)
        return 1

    streamer = ThermalStreamer(sampler, palette, settings)
    streamer.start()
    app = create_app(settings, streamer)

    logger.info("Started AMG8833 Thermal Camera server at %s:%d", settings.host, settings.port)
    try:
        app.run(host=settings.host, port=settings.port, debug=False, threaded=True)
    finally:
        streamer.stop(timeout=settings.period * 2)
        sampler.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
