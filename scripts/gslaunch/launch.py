import os
import shlex
import shutil
import signal
import subprocess
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from gslaunch.args import ArgumentSet
from gslaunch.config import ResolvedConfig
from gslaunch.errors import LaunchError, MissingDependencyError
from gslaunch.logging import Logger

logger = Logger(__name__)

FORWARDED_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGHUP)


class Launcher:
    """Runs the final command, wrapped in gamescope unless the profile says otherwise.

    Without hooks the launcher replaces itself with the command. With a
    pre- or post-launch hook it stays alive as the parent so the post hook
    can run after the command exits, whatever its status.
    """

    def __init__(self, config: ResolvedConfig, environ: Optional[Mapping[str, str]] = None,
                 which: Optional[Callable[[str], Optional[str]]] = None):
        self.config = config
        self.environ = os.environ if environ is None else environ
        self.which = which or shutil.which

    def build_command(self, args: ArgumentSet, command: Sequence[str]) -> List[str]:
        if not command:
            raise LaunchError("no command to launch")
        if not self.config.use_compositor:
            return list(command)

        gamescope = self.which(self.config.gamescope_bin)
        if not gamescope:
            raise MissingDependencyError([self.config.gamescope_bin])
        return [gamescope, *args.tokens(), "--", *command]

    def build_env(self) -> Dict[str, str]:
        env = dict(self.environ)
        for key, value in self.config.exports.items():
            logger.debug(f"export {key}={value}")
            env[key] = value
        return env

    def run_hook(self, name: str, hook: Optional[str], env: Mapping[str, str]) -> int:
        if not hook:
            return 0
        try:
            cmd = shlex.split(hook)
        except ValueError as e:
            logger.warning(f"{name} hook is not a valid command line: {e}")
            return 1
        if not cmd:
            return 0

        logger.info(f"Running {name} hook: {hook}")
        try:
            result = subprocess.run(cmd, env=dict(env), check=False)
        except OSError as e:
            logger.warning(f"{name} hook could not be started: {e}")
            return 127
        if result.returncode != 0:
            logger.warning(f"{name} hook exited with status {result.returncode}")
        return result.returncode

    def _run_child(self, argv: List[str], env: Mapping[str, str]) -> int:
        try:
            proc = subprocess.Popen(argv, env=dict(env))
        except OSError as e:
            raise LaunchError(f"cannot start {argv[0]}: {e}")

        def forward(signum, _frame):
            logger.debug(f"Forwarding signal {signum} to {proc.pid}")
            proc.send_signal(signum)

        previous = {sig: signal.signal(sig, forward) for sig in FORWARDED_SIGNALS}
        try:
            returncode = proc.wait()
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)

        if returncode < 0:
            return 128 - returncode
        return returncode

    def launch(self, args: ArgumentSet, command: Sequence[str]) -> int:
        argv = self.build_command(args, command)
        env = self.build_env()
        logger.info(f"Launching: {' '.join(shlex.quote(a) for a in argv)}")

        if not self.config.pre_launch and not self.config.post_launch:
            try:
                os.execvpe(argv[0], argv, env)
            except OSError as e:
                raise LaunchError(f"cannot exec {argv[0]}: {e}")

        self.run_hook("pre-launch", self.config.pre_launch, env)

        try:
            returncode = self._run_child(argv, env)
        finally:
            post_status = self.run_hook("post-launch", self.config.post_launch, env)

        logger.debug(f"{argv[0]} exited with status {returncode}")
        if post_status != 0 and returncode == 0:
            return post_status
        return returncode
