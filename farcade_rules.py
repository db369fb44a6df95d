"""
FARCADE INJECTION RULES
Every hook the patcher adds to the game bundle lives in this table.
Each step is a list of alternative rules: the primary anchor first, then
progressively looser fallbacks. The first alternative that matches wins.
"""
import re

SDK_SCRIPT_URL = "https://cdn.jsdelivr.net/npm/@farcade/game-sdk@latest/dist/index.min.js"
SDK_SCRIPT_TAG = f'    <script src="{SDK_SCRIPT_URL}"></script>'

READY_MARKER = "window.FarcadeSDK.singlePlayer.actions.ready()"
GAME_OVER_MARKER = "window.FarcadeSDK.singlePlayer.actions.gameOver"
EVENTS_MARKER = "window.FarcadeSDK.on('play_again'"

GAME_OVER_DELAY_MS = 4000
DEFAULT_SCORE_EXPR = "this.maxHeight"
DEFAULT_SCENE_KEY = "VerticalLauncher"

# Report label for a step whose guard marker is already in the document
ALREADY_PRESENT = "already-present"


class InjectionRule:
    def __init__(self, label, pattern, render, guard=None):
        self.label = label
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.render = render
        self.guard = guard

    def is_guarded(self, html):
        return self.guard is not None and self.guard in html

    def apply(self, html):
        """Replace the first match. Returns (new_html, matched)."""
        new_html, count = self.pattern.subn(self.render, html, count=1)
        return new_html, count > 0


class InjectionStep:
    def __init__(self, name, alternatives):
        self.name = name
        self.alternatives = list(alternatives)

    def apply(self, html, log=print):
        for rule in self.alternatives:
            if rule.is_guarded(html):
                log(f"  [SKIP] {self.name}/{rule.label}: '{rule.guard}' already present")
                return html, ALREADY_PRESENT
            new_html, matched = rule.apply(html)
            if matched:
                log(f"  [OK] {self.name}: {rule.label} anchor matched")
                return new_html, rule.label
            log(f"  [WARN] {self.name}: {rule.label} anchor not found")
        log(f"  [WARN] {self.name}: no anchor matched, hook omitted")
        return html, None


def apply_rules(html, rules, log=print):
    """Run every step in order. Returns (html, report) where report maps
    step name to the label that matched, ALREADY_PRESENT or None."""
    report = {}
    for step in rules:
        html, report[step.name] = step.apply(html, log=log)
    return html, report


# ------------------------------------------------------------------
# Renderers
# ------------------------------------------------------------------

def _render_sdk_tag(match):
    return f"{SDK_SCRIPT_TAG}\n{match.group(0)}"


def _render_ready(match):
    return match.group(0) + """

                // Farcade SDK: Signal that the game is fully loaded and ready to play
                if (window.FarcadeSDK) {
                    window.FarcadeSDK.singlePlayer.actions.ready();
                    console.log('Farcade SDK: Game ready signal sent.');
                }"""


def _game_over_hook(comment, log_suffix, score_expr, delay_ms):
    return """

                // Farcade SDK: %(comment)s
                if (window.FarcadeSDK) {
                    this.playButton.setVisible(false); // Hide our button since Farcade UI takes over

                    this.time.delayedCall(%(delay)d, () => {
                        window.FarcadeSDK.singlePlayer.actions.gameOver({ score: %(score)s });
                        console.log('Farcade SDK: Game over signal sent with score%(suffix)s:', %(score)s);
                    });
                }""" % {
        "comment": comment,
        "delay": delay_ms,
        "score": score_expr,
        "suffix": log_suffix,
    }


def _render_event_handlers(scene_key):
    def render(match):
        return match.group(0) + """

        // Farcade SDK: Register event handlers for 'play_again' and 'toggle_mute'
        if (window.FarcadeSDK) {
            // Handle play again requests from Farcade
            window.FarcadeSDK.on('play_again', () => {
                console.log('Farcade SDK: Play again requested.');
                const activeScene = game.scene.getScene('%(scene)s');
                if (activeScene && activeScene.startGame) {
                    // Clean up game over elements before restarting
                    if (activeScene.hideGameOverElements) {
                        activeScene.hideGameOverElements();
                        console.log('Farcade SDK: Game over elements cleaned up.');
                    }
                    activeScene.startGame();
                    console.log('Farcade SDK: Game restarted.');
                } else {
                    console.warn('Farcade SDK: Could not find active scene to restart game.');
                }
            });

            // Handle mute/unmute requests from Farcade
            window.FarcadeSDK.on('toggle_mute', (data) => {
                console.log('Farcade SDK: Mute toggle requested, isMuted:', data.isMuted);
                game.sound.mute = data.isMuted;
                console.log('Farcade SDK: All game audio mute state set to:', data.isMuted);
            });

            console.log('Farcade SDK: Event handlers registered.');
        }""" % {"scene": scene_key}
    return render


# ------------------------------------------------------------------
# Anchors
# ------------------------------------------------------------------

HEAD_CLOSE_PATTERN = r"</head>"
TITLE_SCREEN_PATTERN = r"showTitleScreen\(\) \{[\s\S]*?this\.gameElements\.forEach\(element => element\.setVisible\(false\)\);"
PLAY_BUTTON_SETUP_PATTERN = r"this\.playButton\.setPosition\([^)]+\);\s*this\.playButton\.setInteractive\(\);"
PLAY_BUTTON_HANDLER_PATTERN = r"this\.playButton\.removeAllListeners\(\);\s*this\.playButton\.on\('pointerdown', \(\) => \{[\s\S]*?this\.startGame\(\);[\s\S]*?\}\);"
GAME_OVER_METHOD_END_PATTERN = r"(showGameOverScreen\(\) \{[\s\S]*?this\.playButton\.on\('pointerdown'[\s\S]*?\}\);)(\s*\})"
GAME_INSTANCE_PATTERN = r"const game = new Phaser\.Game\(config\);"


def build_rules(score_expr=DEFAULT_SCORE_EXPR, scene_key=DEFAULT_SCENE_KEY, delay_ms=GAME_OVER_DELAY_MS):
    """Build the ordered rule set for one game.

    score_expr is the JS expression reported as the score, scene_key the
    Phaser scene that owns startGame().
    """
    primary_hook = _game_over_hook(
        "Hide our play button and call SDK gameOver after a delay", "", score_expr, delay_ms)
    alternative_hook = _game_over_hook(
        "Hide button and call gameOver (alternative injection)", " (alternative)", score_expr, delay_ms)
    end_of_method_hook = _game_over_hook(
        "Hide button and call gameOver (end-of-method injection)", " (end-of-method)", score_expr, delay_ms)

    return [
        InjectionStep("sdk_script", [
            InjectionRule("primary", HEAD_CLOSE_PATTERN, _render_sdk_tag, guard=SDK_SCRIPT_URL),
        ]),
        InjectionStep("ready", [
            InjectionRule("primary", TITLE_SCREEN_PATTERN, _render_ready, guard=READY_MARKER),
        ]),
        InjectionStep("game_over", [
            InjectionRule("primary", PLAY_BUTTON_SETUP_PATTERN,
                          lambda m: m.group(0) + primary_hook, guard=GAME_OVER_MARKER),
            InjectionRule("alternative", PLAY_BUTTON_HANDLER_PATTERN,
                          lambda m: m.group(0) + alternative_hook, guard=GAME_OVER_MARKER),
            InjectionRule("end-of-method", GAME_OVER_METHOD_END_PATTERN,
                          lambda m: m.group(1) + end_of_method_hook + m.group(2), guard=GAME_OVER_MARKER),
        ]),
        InjectionStep("event_handlers", [
            InjectionRule("primary", GAME_INSTANCE_PATTERN, _render_event_handlers(scene_key), guard=EVENTS_MARKER),
        ]),
    ]
