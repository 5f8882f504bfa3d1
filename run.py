import uvicorn
from config import config
from utils.logging_utils import setup_logging

if __name__ == "__main__":
    config.setup_from_args()
    setup_logging(config.debug_mode)

    from main import app

    # Display startup information with available command-line options
    print("\n" + "="*60)
    print("Form Coach Backend")
    print("="*60)
    print(f"Mode: {config.mode_description}")
    print(f"Default exercise: {config.default_exercise}")
    print("\nAvailable modes:")
    print("  python run.py --mode debug         # Debug with frame saving")
    print("  python run.py --mode debug_no_save # Debug without frame saving")
    print("  python run.py --mode non_debug     # Minimal logging only")
    print("="*60 + "\n")

    uvicorn.run(app, host=config.host, port=config.port)
