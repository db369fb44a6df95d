import os
import sys

import pytest

ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import patch_log  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_log(monkeypatch):
    monkeypatch.setattr(patch_log, "LOG_FILE", None)


GAME_HTML = """<!DOCTYPE html>
<html>
<head>
    <title>Vertical Launcher</title>
    <script src="https://cdn.jsdelivr.net/npm/phaser@3/dist/phaser.min.js"></script>
</head>
<body>
<script>
class VerticalLauncher extends Phaser.Scene {
    showTitleScreen() {
        this.titleText.setVisible(true);
        this.gameElements.forEach(element => element.setVisible(false));
        this.playButton.setVisible(true);
    }

    showGameOverScreen() {
        this.gameOverText.setVisible(true);
        this.playButton.setPosition(200, 400);
        this.playButton.setInteractive();
        this.playButton.removeAllListeners();
        this.playButton.on('pointerdown', () => {
            this.hideGameOverElements();
            this.startGame();
        });
    }
}

const config = { type: Phaser.AUTO, scene: [VerticalLauncher] };
const game = new Phaser.Game(config);
</script>
</body>
</html>
"""


@pytest.fixture
def game_html():
    return GAME_HTML
