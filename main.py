"""
Tweetle Prover Server - Main Entry Point

This is the main entry point for the tournament prover server.
It initializes all services and starts the Flask application.
"""

from tweetle_prover import create_app
from tweetle_prover.config import Config, validate_word_list_integrity, word_count
from tweetle_prover.models.proof import PipelineStage
from tweetle_prover.services.commitment_service import CommitmentService
from tweetle_prover.services.proof_service import ProofService
from tweetle_prover.services.toolchain import tool_env
from tweetle_prover.services.tournament_service import initialize_tournament_service
from tweetle_prover.services.tournament_store import TournamentStore
from tweetle_prover.utils.prover_logger import prover_logger


def build_services(config_class=Config):
    """Wire the store, circuit services and tournament service from configuration."""
    validate_word_list_integrity()

    store = TournamentStore(config_class.MONGO_URI, config_class.MONGO_DB_NAME)
    env = tool_env(config_class.TOOL_PATH_EXTRA)

    commitment_service = CommitmentService(
        config_class.commitment_circuit_dir(),
        nargo_bin=config_class.NARGO_BIN,
        timeout=config_class.NARGO_TIMEOUT_SECONDS,
        env=env,
    )
    proof_service = ProofService(
        config_class.main_circuit_dir(),
        circuit_name=config_class.MAIN_CIRCUIT_NAME,
        nargo_bin=config_class.NARGO_BIN,
        bb_bin=config_class.BB_BIN,
        garaga_bin=config_class.GARAGA_BIN,
        timeouts={
            PipelineStage.WITNESS: config_class.NARGO_TIMEOUT_SECONDS,
            PipelineStage.PROOF: config_class.BB_TIMEOUT_SECONDS,
            PipelineStage.CALLDATA: config_class.GARAGA_TIMEOUT_SECONDS,
        },
        env=env,
    )
    return initialize_tournament_service(store, commitment_service, proof_service)


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        if not Config.MONGO_URI:
            print("✗ MongoDB URI not configured")
            raise SystemExit(1)

        build_services(Config)
        print(f"✓ Tournament service initialized ({word_count()} words)")

        print("Creating Flask application...")
        app = create_app(Config)
        print("✓ Flask application created successfully")

        prover_logger.logger.info("Tweetle Prover Server starting")

        print(f"\nStarting Tweetle Prover Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"Circuits: {Config.CIRCUITS_DIR}")
        print("=" * 50)

        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG, threaded=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        prover_logger.logger.info("Tweetle Prover Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        prover_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
