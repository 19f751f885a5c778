from blog_backend.database import init_db

def main():
    init_db()
    print("Tables created successfully")

if __name__ == "__main__":
    main()
