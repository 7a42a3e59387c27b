from shop_orders.main import main

main()
