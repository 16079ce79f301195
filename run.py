import uvicorn
from pivpn_client.logging_utility import logger


if __name__=='__main__':
    logger.info("Starting PiVPN Client API")
    uvicorn.run("pivpn_client.main:create_default_app", factory=True, host="0.0.0.0", port=8000)
