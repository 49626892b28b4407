"""
Contract Deployment Wrapper
Runs the deployment script and exits with its return code
"""

import os
import subprocess
import sys
from loguru import logger

SCRIPT_MODULE = "proxy_deploy.scripts.deploy_contract"
ROOT = os.path.dirname(os.path.abspath(__file__))


def main() -> int:
    # stdout belongs to the deployment script; banners go to stderr
    logger.info("=" * 70)
    logger.info("Upgradeable Contract Deployment")
    logger.info("=" * 70)

    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (ROOT, env.get("PYTHONPATH")) if p)

    result = subprocess.run([sys.executable, "-m", SCRIPT_MODULE], cwd=".", env=env)

    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
