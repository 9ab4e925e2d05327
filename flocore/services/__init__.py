"""Services: generation clients, document corpus, specialists and orchestration"""
