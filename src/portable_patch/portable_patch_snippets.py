"""
Fixed code blocks inserted into the application's main.js, and the rules that place them.
"""

from typing import List

from text_patch import InsertAfterLineRule, InsertBeforeClosingRule, TextPatchRule


# Presence of this line is what marks main.js as patched
PATCH_MARKER = 'const isPortable = true;'

PATH_REQUIRE_ANCHOR = 'const path = require("node:path");'
WEB_PREFERENCES_ANCHOR = 'webPreferences: {'
WEB_PREFERENCES_CLOSE = '\n    }'

PERFORMANCE_SWITCHES = """
// Performance optimizations
app.commandLine.appendSwitch('enable-features', 'SharedArrayBuffer,HighPriorityLoading');
app.commandLine.appendSwitch('disable-features', 'OutOfBlinkCors,CalculateNativeWinOcclusion');
app.commandLine.appendSwitch('disable-gpu-vsync');
app.commandLine.appendSwitch('ignore-gpu-blacklist');
app.commandLine.appendSwitch('enable-gpu-rasterization');
app.commandLine.appendSwitch('enable-zero-copy');
app.commandLine.appendSwitch('disable-http-cache', 'false');
"""

PORTABLE_CONFIG = """
// Set up portable mode - store all data in the app directory
const isPortable = true; // Can be controlled by a config file later
if (isPortable) {
  const portableDir = path.join(__dirname, 'data');
  // Set all possible app paths to be portable
  app.setPath('userData', portableDir);
  app.setPath('logs', path.join(portableDir, 'logs'));
  app.setPath('crashDumps', path.join(portableDir, 'crashes'));
  app.setPath('temp', path.join(portableDir, 'temp'));
  app.setPath('cache', path.join(portableDir, 'cache'));
  
  // Ensure all directories exist
  [
    portableDir,
    path.join(portableDir, 'logs'),
    path.join(portableDir, 'crashes'),
    path.join(portableDir, 'temp'),
    path.join(portableDir, 'cache')
  ].forEach(dir => {
    if (!require('fs').existsSync(dir)) {
      require('fs').mkdirSync(dir, { recursive: true });
    }
  });

  // Disable automatic updates since we're in portable mode
  app.disableHardwareAcceleration(); // Prevent GPU issues in portable mode
  if (app.setLoginItemSettings) {
    app.setLoginItemSettings({ openAtLogin: false }); // Prevent auto-start
  }
}
"""

WINDOW_SETTINGS = """
    backgroundThrottling: false,
    nodeIntegration: false,
    contextIsolation: true,
    enableRemoteModule: false,
    v8CacheOptions: "code",
    javascript: true,
    enableBlinkFeatures: 'HighPriorityLoading'
"""


def build_patch_rules() -> List[TextPatchRule]:
    """
    Build the ordered rule list for patching main.js.

    Both require-anchored blocks land directly after the anchor line, so the
    portable config (applied second) ends up above the performance switches.

    Returns:
        Rules in application order
    """
    return [
        InsertAfterLineRule('performance switches', PATH_REQUIRE_ANCHOR, PERFORMANCE_SWITCHES),
        InsertAfterLineRule('portable mode config', PATH_REQUIRE_ANCHOR, PORTABLE_CONFIG),
        InsertBeforeClosingRule(
            'window settings',
            WEB_PREFERENCES_ANCHOR,
            WINDOW_SETTINGS,
            closing_marker=WEB_PREFERENCES_CLOSE
        ),
    ]
