import sys
from PyQt6.QtCore import QCoreApplication, QTimer

from src.core import TimelineController
from src.utils.logger import logger

DEMO_SECONDS = 3


def main():
    app = QCoreApplication(sys.argv)

    # Headless timeline: clips named on the command line are appended in order
    timeline = TimelineController()
    for name in sys.argv[1:] or ["intro.wav", "beat.wav", "vocals.wav", "outro.wav"]:
        result = timeline.append_clip(name)
        if not result:
            logger.warning(f"Could not place {name}: {result.error}")

    for clip in timeline.clips:
        logger.info(f"{clip.name}: row {timeline.row_of(clip)} x={clip.x} width={clip.width}")

    def finish():
        logger.info(f"Elapsed {timeline.elapsed_display}, playhead at x={timeline.playhead_position:.1f}")
        timeline.dispose()
        app.quit()

    timeline.play()
    QTimer.singleShot(DEMO_SECONDS * 1000, finish)

    sys.exit(app.exec())

if __name__ == "__main__":
    main()
