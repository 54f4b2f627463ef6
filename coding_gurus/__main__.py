from coding_gurus.main import run

if __name__ == "__main__":
    run()
