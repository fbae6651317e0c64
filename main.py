from acrhooks.main import run_from_env

def main():
    """Run the container registry with webhooks sample using default settings."""
    run_from_env()

if __name__ == "__main__":
    main()
